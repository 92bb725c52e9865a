#!/usr/bin/env python3
"""
ToolGuard Core Access — Path Validator
========================================
Prefix-based path validation:
1. Absolute paths only
2. Lexical cleanup (., .., duplicate and trailing separators)
3. Symlink resolution, falling back to the cleaned path when the target
   cannot be resolved (missing output files stay writable)
4. Blocked prefixes always win over allowed prefixes

Import from: toolguard.core.access.path_validator
"""

import os

from toolguard.core.types import ActionType, Decision, SecurityError, ValidationError
from toolguard.core.access.policy import PolicyStore


def clean_path(path: str) -> str:
    """Lexically normalize an absolute path without touching the filesystem."""
    cleaned = os.path.normpath(path)
    # POSIX normpath keeps a leading '//'; collapse it so '//etc' still
    # matches the '/etc' prefix.
    if cleaned.startswith('//'):
        cleaned = '/' + cleaned.lstrip('/')
    return cleaned


def resolve_path(cleaned: str) -> str:
    try:
        return os.path.realpath(cleaned, strict=True)
    except (OSError, ValueError):
        return cleaned


def has_path_prefix(path: str, prefix: str) -> bool:
    """Component-wise prefix test: '/etc' matches '/etc' and '/etc/x', not '/etcd'."""
    prefix = clean_path(prefix)
    if prefix == os.sep or prefix == '/':
        return True
    return path == prefix or path.startswith(prefix.rstrip(os.sep) + os.sep)


class PathValidator:
    def __init__(self, policy: PolicyStore, logger=None):
        self.policy = policy
        self.logger = logger

    def validate(self, path: str) -> str:
        """Validate a path. Returns the resolved path or raises.

        Raises:
            ValidationError: empty or relative path.
            SecurityError: blocked prefix, or allow-list miss.
        """
        try:
            resolved = self._check(path)
        except (ValidationError, SecurityError) as e:
            self._record(Decision.from_error(ActionType.PATH_ACCESS, path, e))
            raise
        self._record(Decision(ActionType.PATH_ACCESS, path, True, normalized=resolved))
        return resolved

    def sanitize(self, path: str) -> str:
        """Validate, then return the cleaned (not symlink-resolved) path."""
        self.validate(path)
        return clean_path(path)

    def _check(self, path: str) -> str:
        if not path or not os.path.isabs(path):
            raise ValidationError("path must be absolute")

        resolved = resolve_path(clean_path(path))
        policy = self.policy.snapshot()

        for blocked in policy.blocked_paths:
            if has_path_prefix(resolved, blocked):
                raise SecurityError(
                    "path is blocked",
                    "path accesses restricted system directory",
                )

        if policy.allowed_paths:
            if not any(has_path_prefix(resolved, allowed) for allowed in policy.allowed_paths):
                raise SecurityError(
                    "path not allowed",
                    "path is not in allowed directories",
                )

        return resolved

    def _record(self, decision: Decision) -> None:
        if self.logger is not None:
            self.logger.log_decision(decision)


__all__ = ['PathValidator', 'clean_path', 'resolve_path', 'has_path_prefix']
