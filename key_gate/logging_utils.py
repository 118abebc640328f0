import time

from flask import g, request

from .config import LOG_MAX_CHARS
from .logger import logger


def _truncate_log(text):
    text = "" if text is None else str(text)
    if len(text) > LOG_MAX_CHARS:
        return text[:LOG_MAX_CHARS] + "...<truncated>"
    return text


def _log_gate_request(log, method, url):
    log.info("Request: %s %s", method, _truncate_log(url))


def _log_gate_authorized(log, method, url):
    log.info("Authorized request: %s %s", method, _truncate_log(url))


def _log_forwarded(status_code):
    forwarded_at = getattr(g, "forwarded_at", None)
    elapsed_ms = (time.time() - forwarded_at) * 1000.0 if forwarded_at else 0.0
    logger.info(
        "Forwarded %s %s -> %s via %s credential (stripped=%s, %.2f ms)",
        request.method,
        _truncate_log(request.path),
        status_code,
        getattr(g, "credential_source", None),
        getattr(g, "credential_stripped", False),
        elapsed_ms,
    )
