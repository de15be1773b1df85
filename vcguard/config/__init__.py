"""Configuration handling for vcguard."""

from .models import (
    BUILTIN_CHECKS,
    BackendConfig,
    CheckDefinition,
    CheckRule,
    CommandMode,
    CommandSpec,
    GuardConfig,
    OpenFileEntry,
    SessionFile,
    first_matching_rule,
    validate_check_list,
)
from .loader import ConfigError, ConfigLoader, session_from_paths

__all__ = [
    "BUILTIN_CHECKS",
    "BackendConfig",
    "CheckDefinition",
    "CheckRule",
    "CommandMode",
    "CommandSpec",
    "GuardConfig",
    "OpenFileEntry",
    "SessionFile",
    "first_matching_rule",
    "validate_check_list",
    "ConfigError",
    "ConfigLoader",
    "session_from_paths",
]
