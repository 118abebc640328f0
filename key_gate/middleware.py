from collections import namedtuple

from werkzeug.datastructures import EnvironHeaders
from werkzeug.wsgi import get_current_url

from .config import validate_config
from .credentials import credential_sources, extract_key, remove_header
from .errors import _rejection_response
from .logger import logger as gate_logger
from .logging_utils import _log_gate_authorized, _log_gate_request

Decision = namedtuple("Decision", ["authorized", "source"])

REJECTED = Decision(False, None)

# Set on the environ of every forwarded request.
SOURCE_ENVIRON_KEY = "key_gate.source"
STRIPPED_ENVIRON_KEY = "key_gate.stripped"


class KeyGate:
    """WSGI middleware that only lets requests carrying a configured key through.

    The header credential is checked before the Bearer credential; the first
    source presenting a known key authorizes the request. Every failure is
    answered with the same 403 JSON body and the wrapped app is not called.
    """

    def __init__(self, app, settings, logger=None):
        self.app = app
        self.settings = settings
        self.log = logger or gate_logger
        self._sources = credential_sources(settings)

    def decide(self, environ):
        headers = EnvironHeaders(environ)
        for source in self._sources:
            key = extract_key(source, headers)
            if key is not None and key in self.settings.valid_keys:
                return Decision(True, source)
        return REJECTED

    def __call__(self, environ, start_response):
        method = environ.get("REQUEST_METHOD", "GET")
        if self.settings.log_enabled:
            _log_gate_request(self.log, method, get_current_url(environ))

        decision = self.decide(environ)
        if not decision.authorized:
            return self._reject(environ, start_response)

        environ[SOURCE_ENVIRON_KEY] = decision.source.kind
        environ[STRIPPED_ENVIRON_KEY] = self.settings.strip_header_on_success
        if self.settings.strip_header_on_success:
            remove_header(environ, decision.source.header_name)
        if self.settings.log_enabled:
            _log_gate_authorized(self.log, method, get_current_url(environ))
        return self.app(environ, start_response)

    def _reject(self, environ, start_response):
        response = _rejection_response()
        try:
            return response(environ, start_response)
        except Exception:
            if self.settings.log_enabled:
                self.log.exception("Error sending response.")
            return []


def create_gate(app, raw_config, name="key-gate", logger=None):
    settings = validate_config(raw_config, name=name, logger=logger)
    return KeyGate(app, settings, logger=logger)


def init_app(flask_app, raw_config, name=None, logger=None):
    """Wrap ``flask_app.wsgi_app`` with a gate built from ``raw_config``."""
    gate = create_gate(flask_app.wsgi_app, raw_config, name=name or flask_app.name, logger=logger)
    flask_app.wsgi_app = gate
    flask_app.extensions["key_gate"] = gate
    return gate
