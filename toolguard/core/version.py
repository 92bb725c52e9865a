"""
ToolGuard Core — Version Constants

Single source of truth for all version-related values.
Import from here instead of hardcoding versions elsewhere.

Usage:
    from toolguard.core.version import __version__, CONFIG_SCHEMA_VERSION
"""

# =============================================================================
# PACKAGE VERSION
# =============================================================================

__version__ = "1.2.0"


# =============================================================================
# CONFIG SCHEMA
# =============================================================================

# Tracks the toolguard.json structure, not the code.
# Only increment when the config file structure changes.
CONFIG_SCHEMA_VERSION = "1.0"

CONFIG_FILENAME = "toolguard.json"


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    '__version__',
    'CONFIG_SCHEMA_VERSION',
    'CONFIG_FILENAME',
]
