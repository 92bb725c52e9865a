"""
ToolGuard Core — Validation and Sanitization Engine

Submodules:
- version   : Version constants (single source of truth)
- types     : Shared enums, dataclasses, exceptions
- constants : Default block-lists, URL scheme set, limits
- config    : GuardConfig (file + environment)
- access/   : Policy store, path validation, command validation
- network/  : URL validation (scheme + loopback screening)
- audit/    : Chain-hashed decision logging
- validator : DefaultValidator facade used by tool handlers

Quick imports:
    from toolguard.core import DefaultValidator, GuardConfig
    from toolguard.core import ValidationError, SecurityError
"""

from toolguard.core.version import __version__, CONFIG_SCHEMA_VERSION, CONFIG_FILENAME

from toolguard.core.types import (
    # Exceptions
    GuardError,
    ValidationError,
    SecurityError,
    ConfigError,
    # Enums
    ErrorKind,
    ActionType,
    # Dataclasses
    Decision,
    CommandResult,
    FetchResult,
)

from toolguard.core.constants import (
    DEFAULT_BLOCKED_PATHS, DEFAULT_BLOCKED_COMMANDS,
    ALLOWED_URL_SCHEMES, LOOPBACK_HOST_MARKERS,
)

from toolguard.core.config import GuardConfig
from toolguard.core.audit.logger import SecurityLogger
from toolguard.core.access.policy import PolicyStore, PolicySnapshot
from toolguard.core.validator import Validator, DefaultValidator

__all__ = [
    '__version__', 'CONFIG_SCHEMA_VERSION', 'CONFIG_FILENAME',
    'GuardError', 'ValidationError', 'SecurityError', 'ConfigError',
    'ErrorKind', 'ActionType',
    'Decision', 'CommandResult', 'FetchResult',
    'DEFAULT_BLOCKED_PATHS', 'DEFAULT_BLOCKED_COMMANDS',
    'ALLOWED_URL_SCHEMES', 'LOOPBACK_HOST_MARKERS',
    'GuardConfig', 'SecurityLogger',
    'PolicyStore', 'PolicySnapshot',
    'Validator', 'DefaultValidator',
]
