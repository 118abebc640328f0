from werkzeug.datastructures import Headers

from key_gate.config import validate_config
from key_gate.credentials import (
    BEARER,
    HEADER,
    CredentialSource,
    credential_sources,
    extract_key,
    remove_header,
)


def test_header_source_returns_raw_value():
    source = CredentialSource(HEADER, "X-API-KEY")
    assert extract_key(source, Headers({"x-api-key": " spaced "})) == " spaced "
    assert extract_key(source, Headers()) == ""


def test_bearer_source_requires_exact_prefix():
    source = CredentialSource(BEARER, "Authorization")
    assert extract_key(source, Headers({"Authorization": "Bearer abc"})) == "abc"
    assert extract_key(source, Headers({"Authorization": "Bearer  abc"})) == " abc"
    assert extract_key(source, Headers({"Authorization": "Bearerabc"})) is None
    assert extract_key(source, Headers({"Authorization": "Basic abc"})) is None
    assert extract_key(source, Headers()) is None


def test_sources_in_priority_order():
    settings = validate_config({"keys": ["k"]})
    assert credential_sources(settings) == (
        CredentialSource(HEADER, "X-API-KEY"),
        CredentialSource(BEARER, "Authorization"),
    )
    only_bearer = validate_config({"keys": ["k"], "authenticationHeader": False})
    assert credential_sources(only_bearer) == (CredentialSource(BEARER, "Authorization"),)


def test_remove_header_from_environ():
    environ = {"HTTP_X_API_KEY": "k", "CONTENT_TYPE": "text/plain", "HTTP_OTHER": "o"}
    remove_header(environ, "x-api-key")
    remove_header(environ, "Content-Type")
    remove_header(environ, "Missing-Header")
    assert environ == {"HTTP_OTHER": "o"}
