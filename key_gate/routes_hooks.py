import time

from flask import g, request
from werkzeug.exceptions import HTTPException

from .errors import _error
from .logger import logger
from .logging_utils import _log_forwarded
from .middleware import SOURCE_ENVIRON_KEY, STRIPPED_ENVIRON_KEY


def register_request_hooks(app):
    @app.before_request
    def _record_gate_decision():
        # Only forwarded requests reach Flask, so the gate has always run.
        g.credential_source = request.environ.get(SOURCE_ENVIRON_KEY)
        g.credential_stripped = request.environ.get(STRIPPED_ENVIRON_KEY, False)
        g.forwarded_at = time.time()

    @app.after_request
    def _log_forwarded_response(response):
        _log_forwarded(response.status_code)
        return response

    @app.errorhandler(Exception)
    def _handle_exception(error):
        source = getattr(g, "credential_source", None)
        if isinstance(error, HTTPException):
            logger.warning(
                "Downstream HTTP error %s on %s %s (credential=%s)",
                error.code,
                request.method,
                request.path,
                source,
            )
            return _error(error.description, status=error.code, error_type="http_error")
        logger.exception(
            "Downstream failure on %s %s (credential=%s)", request.method, request.path, source
        )
        return _error("Internal server error.", status=500, error_type="server_error")
