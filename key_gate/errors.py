import json

from flask import jsonify
from werkzeug.wrappers import Response

INVALID_KEY_MESSAGE = "Invalid API Key"
FORBIDDEN_STATUS = 403
REJECTION_CONTENT_TYPE = "application/json; charset=utf-8"


class ConfigError(ValueError):
    """Raised when a gate cannot be built from its configuration."""


class EmptyKeyList(ConfigError):
    def __init__(self, message="must specify at least one valid key"):
        super().__init__(message)


class NoCredentialSourceEnabled(ConfigError):
    def __init__(self, message="at least one header type must be true"):
        super().__init__(message)


class InvalidConfigField(ConfigError):
    def __init__(self, field, expected, value):
        self.field = field
        super().__init__(
            f"config field {field!r} must be {expected}, got {type(value).__name__}"
        )


def _rejection_payload():
    return {"message": INVALID_KEY_MESSAGE, "statusCode": FORBIDDEN_STATUS}


def _rejection_response():
    # Same body for every failure cause.
    body = json.dumps(_rejection_payload(), separators=(",", ":"))
    return Response(body, status=FORBIDDEN_STATUS, content_type=REJECTION_CONTENT_TYPE)


def _error_payload(message, error_type="gate_error", code=None):
    payload = {"error": {"message": message, "type": error_type}}
    if code is not None:
        payload["error"]["code"] = code
    return payload


def _error(message, status=400, error_type="gate_error", code=None):
    payload = _error_payload(message, error_type=error_type, code=code)
    return jsonify(payload), status
