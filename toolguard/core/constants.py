"""
ToolGuard Constants — Default Policy Seeds, Limits, and Configuration
=====================================================================
Non-configurable defaults used across the engine. Seeded block-lists,
URL scheme allowlist, loopback markers, executor limits.

Import from: toolguard.core.constants
"""

import sys

# =============================================================================
# PLATFORM DETECTION
# =============================================================================

IS_WINDOWS = sys.platform == 'win32'

# =============================================================================
# PATH POLICY
# =============================================================================

# Sensitive system directories. Always checked; the public API can only
# append to this set.
DEFAULT_BLOCKED_PATHS = (
    '/etc',
    '/usr/bin',
    '/usr/sbin',
    '/sbin',
    '/bin',
    '/sys',
    '/proc',
)

# =============================================================================
# COMMAND POLICY
# =============================================================================

# Glob patterns over executable base names.
DEFAULT_BLOCKED_COMMANDS = (
    'sudo',
    'su',
    'chmod',
    'chown',
    'rm',
    'rmdir',
    'dd',
    'mkfs',
    'fdisk',
    'mount',
    'umount',
)

# =============================================================================
# URL POLICY
# =============================================================================

ALLOWED_URL_SCHEMES = frozenset({'http', 'https'})

# Substring match against the URL host (port included).
LOOPBACK_HOST_MARKERS = ('localhost', '127.0.0.1', '::1')

# =============================================================================
# EXECUTOR LIMITS
# =============================================================================

COMMAND_TIMEOUT = 30            # Seconds
FETCH_TIMEOUT = 15              # Seconds
MAX_OUTPUT_LENGTH = 50000       # Characters kept from stdout/stderr
MAX_FILE_SIZE_MB = 10
MAX_FETCH_BYTES = 5 * 1024 * 1024
MAX_REDIRECTS = 5

# =============================================================================
# AUDIT LOG
# =============================================================================

SESSION_ID_BYTES = 8            # 16 hex chars for session IDs
MAX_LOGGED_TARGET = 200

# =============================================================================
# ENVIRONMENT
# =============================================================================

# Variables passed through to guarded subprocesses
SAFE_ENV_VARS = {
    'PATH', 'HOME', 'LANG', 'LC_ALL', 'TERM', 'TMPDIR',
    'SYSTEMROOT', 'SYSTEMDRIVE', 'WINDIR', 'PATHEXT', 'COMSPEC',
}

__all__ = [
    'IS_WINDOWS',
    'DEFAULT_BLOCKED_PATHS', 'DEFAULT_BLOCKED_COMMANDS',
    'ALLOWED_URL_SCHEMES', 'LOOPBACK_HOST_MARKERS',
    'COMMAND_TIMEOUT', 'FETCH_TIMEOUT', 'MAX_OUTPUT_LENGTH',
    'MAX_FILE_SIZE_MB', 'MAX_FETCH_BYTES', 'MAX_REDIRECTS',
    'SESSION_ID_BYTES', 'MAX_LOGGED_TARGET',
    'SAFE_ENV_VARS',
]
