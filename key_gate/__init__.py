from .config import DEFAULT_CONFIG, Settings, validate_config
from .credentials import BEARER, HEADER, CredentialSource
from .errors import ConfigError, EmptyKeyList, InvalidConfigField, NoCredentialSourceEnabled
from .middleware import Decision, KeyGate, create_gate, init_app

__all__ = [
    "BEARER",
    "ConfigError",
    "CredentialSource",
    "DEFAULT_CONFIG",
    "Decision",
    "EmptyKeyList",
    "HEADER",
    "InvalidConfigField",
    "KeyGate",
    "NoCredentialSourceEnabled",
    "Settings",
    "create_gate",
    "init_app",
    "validate_config",
]
