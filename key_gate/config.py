import json
import os
from collections import namedtuple

from dotenv import load_dotenv

from .errors import EmptyKeyList, InvalidConfigField, NoCredentialSourceEnabled
from .logger import logger as gate_logger

DEFAULT_CONFIG = {
    "authenticationHeader": True,
    "headerName": "X-API-KEY",
    "bearerHeader": True,
    "bearerHeaderName": "Authorization",
    "keys": [],
    "removeHeadersOnSuccess": True,
    "enableLog": False,
}

_BOOL_FIELDS = ("authenticationHeader", "bearerHeader", "removeHeadersOnSuccess", "enableLog")
_STR_FIELDS = ("headerName", "bearerHeaderName")
_TRUTHY = {"1", "true", "yes", "y", "on"}

Settings = namedtuple(
    "Settings",
    [
        "use_header_credential",
        "header_credential_name",
        "use_bearer_credential",
        "bearer_header_name",
        "valid_keys",
        "strip_header_on_success",
        "log_enabled",
    ],
)


def _load_dotenv(path=None):
    """Load ``.env`` from the working directory without overriding the environment."""
    dotenv_path = path or os.path.join(os.getcwd(), ".env")
    if not os.path.isfile(dotenv_path):
        return False
    return load_dotenv(dotenv_path, override=False)


def _bool_env(name, default=False):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _json_env(name, default):
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        gate_logger.warning("%s is not valid JSON, falling back to %r.", name, default)
        return default


def _int_env(name, default):
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        gate_logger.warning("%s is not an integer, falling back to %s.", name, default)
        return default


_load_dotenv()

LOG_MAX_CHARS = _int_env("KEY_GATE_LOG_MAX_CHARS", 2000)

_ENV_BOOL_OVERRIDES = {
    "KEY_GATE_AUTHENTICATION_HEADER": "authenticationHeader",
    "KEY_GATE_BEARER_HEADER": "bearerHeader",
    "KEY_GATE_REMOVE_HEADERS_ON_SUCCESS": "removeHeadersOnSuccess",
    "KEY_GATE_ENABLE_LOG": "enableLog",
}
_ENV_STR_OVERRIDES = {
    "KEY_GATE_HEADER_NAME": "headerName",
    "KEY_GATE_BEARER_HEADER_NAME": "bearerHeaderName",
}


def load_config_from_env():
    """Build a raw gate config from KEY_GATE_CONFIG plus KEY_GATE_* overrides."""
    config = _json_env("KEY_GATE_CONFIG", {})
    if not isinstance(config, dict):
        gate_logger.warning("KEY_GATE_CONFIG must be a JSON object, ignoring it.")
        config = {}
    else:
        config = dict(config)
    for env_name, field in _ENV_BOOL_OVERRIDES.items():
        if os.getenv(env_name) is not None:
            config[field] = _bool_env(env_name)
    for env_name, field in _ENV_STR_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None:
            config[field] = value.strip()
    raw_keys = os.getenv("KEY_GATE_KEYS")
    if raw_keys is not None:
        config["keys"] = [key.strip() for key in raw_keys.split(",") if key.strip()]
    return config


def _merge_defaults(raw_config):
    merged = dict(DEFAULT_CONFIG)
    for field in DEFAULT_CONFIG:
        if field in raw_config:
            merged[field] = raw_config[field]
    if merged["keys"] is None:
        merged["keys"] = []
    return merged


def _check_types(config):
    for field in _BOOL_FIELDS:
        if not isinstance(config[field], bool):
            raise InvalidConfigField(field, "a boolean", config[field])
    for field in _STR_FIELDS:
        if not isinstance(config[field], str):
            raise InvalidConfigField(field, "a string", config[field])
    keys = config["keys"]
    if not isinstance(keys, (list, tuple, set, frozenset)):
        raise InvalidConfigField("keys", "a list of strings", keys)
    for key in keys:
        if not isinstance(key, str):
            raise InvalidConfigField("keys", "a list of strings", key)


def _summarize_config(config):
    summary = dict(config)
    summary["keys"] = f"<{len(config['keys'])} keys>"
    return summary


def validate_config(raw_config, name="key-gate", logger=None):
    """Validate a declarative gate config and return immutable ``Settings``.

    ``raw_config`` uses the JSON field names (``authenticationHeader``,
    ``headerName``, ``bearerHeader``, ``bearerHeaderName``, ``keys``,
    ``removeHeadersOnSuccess``, ``enableLog``); missing fields take the
    values in ``DEFAULT_CONFIG`` and unknown fields are ignored.

    Raises a ``ConfigError`` subclass when the gate cannot be built.
    """
    log = logger or gate_logger
    config = _merge_defaults(raw_config or {})
    _check_types(config)

    if config["enableLog"]:
        log.info("Creating key gate: %s settings=%s", name, _summarize_config(config))

    if len(config["keys"]) == 0:
        raise EmptyKeyList()
    if not config["authenticationHeader"] and not config["bearerHeader"]:
        raise NoCredentialSourceEnabled()

    return Settings(
        use_header_credential=config["authenticationHeader"],
        header_credential_name=config["headerName"],
        use_bearer_credential=config["bearerHeader"],
        bearer_header_name=config["bearerHeaderName"],
        valid_keys=frozenset(config["keys"]),
        strip_header_on_success=config["removeHeadersOnSuccess"],
        log_enabled=config["enableLog"],
    )
