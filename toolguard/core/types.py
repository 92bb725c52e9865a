"""
ToolGuard Core Types — Shared enums, dataclasses, and exceptions.

This module centralizes all type definitions used across the ToolGuard codebase.
The guards, the audit logger, the executor and the CLI import types from here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


# =============================================================================
# ENUMS
# =============================================================================

class ErrorKind(Enum):
    """Which side of the contract an error falls on."""
    VALIDATION = "validation"  # Malformed input, caller error
    SECURITY = "security"      # Well-formed input denied by policy


class ActionType(Enum):
    """Operations gated by the engine."""
    PATH_ACCESS = "path_access"
    COMMAND_EXEC = "command_exec"
    URL_FETCH = "url_fetch"


# =============================================================================
# EXCEPTIONS
# =============================================================================

class GuardError(Exception):
    """Base exception for every decision raised by a guard.

    Rendered as ``CODE: message`` or ``CODE: message (details)`` so callers
    that only surface ``str(err)`` still show the error kind.
    """

    code = "GUARD_ERROR"
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self._render())

    def _render(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} ({self.details})"
        return f"{self.code}: {self.message}"


class ValidationError(GuardError):
    """Raised for malformed or structurally invalid input."""
    code = "VALIDATION_ERROR"
    kind = ErrorKind.VALIDATION


class SecurityError(GuardError):
    """Raised when well-formed input is denied by policy."""
    code = "SECURITY_ERROR"
    kind = ErrorKind.SECURITY


class ConfigError(Exception):
    """Raised when a configuration file or environment override is malformed."""
    pass


# =============================================================================
# DATACLASSES
# =============================================================================

@dataclass
class Decision:
    """Non-raising outcome of a single guard call."""
    action: ActionType
    target: str
    allowed: bool
    reason: str = "OK"
    kind: Optional[ErrorKind] = None
    normalized: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_error(cls, action: ActionType, target: str, err: GuardError) -> 'Decision':
        return cls(action=action, target=target, allowed=False,
                   reason=err.message, kind=err.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'action': self.action.value,
            'target': self.target,
            'allowed': self.allowed,
            'reason': self.reason,
            'kind': self.kind.value if self.kind else None,
            'normalized': self.normalized,
            'timestamp': self.timestamp,
        }


@dataclass
class CommandResult:
    """Output of a guarded command run."""
    stdout: str
    stderr: str
    exit_code: int
    duration: float

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class FetchResult:
    """Response of a guarded URL fetch."""
    url: str
    status_code: int
    content_type: str = ""
    text: str = ""
    truncated: bool = False


__all__ = [
    'ErrorKind', 'ActionType',
    'GuardError', 'ValidationError', 'SecurityError', 'ConfigError',
    'Decision', 'CommandResult', 'FetchResult',
]
