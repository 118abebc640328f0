"""Credential sources a gate reads keys from, in priority order."""

from collections import namedtuple

BEARER_PREFIX = "Bearer "

HEADER = "header"
BEARER = "bearer"

CredentialSource = namedtuple("CredentialSource", ["kind", "header_name"])


def _header_text(headers, header_name):
    # WSGI servers hand header bytes over as latin-1 text; keys are compared as UTF-8.
    value = headers.get(header_name, "")
    try:
        raw = value.encode("latin-1")
    except UnicodeEncodeError:
        return value
    return raw.decode("utf-8", "replace")


def _extract_header_key(headers, header_name):
    return _header_text(headers, header_name)


def _extract_bearer_key(headers, header_name):
    value = _header_text(headers, header_name)
    if not value.startswith(BEARER_PREFIX):
        return None
    return value[len(BEARER_PREFIX):]


_EXTRACTORS = {
    HEADER: _extract_header_key,
    BEARER: _extract_bearer_key,
}


def extract_key(source, headers):
    """Return the candidate key carried by ``source`` or None when malformed."""
    return _EXTRACTORS[source.kind](headers, source.header_name)


def credential_sources(settings):
    sources = []
    if settings.use_header_credential:
        sources.append(CredentialSource(HEADER, settings.header_credential_name))
    if settings.use_bearer_credential:
        sources.append(CredentialSource(BEARER, settings.bearer_header_name))
    return tuple(sources)


def _environ_key(header_name):
    key = header_name.upper().replace("-", "_")
    if key in {"CONTENT_TYPE", "CONTENT_LENGTH"}:
        return key
    return f"HTTP_{key}"


def remove_header(environ, header_name):
    environ.pop(_environ_key(header_name), None)
