#!/usr/bin/env python3
"""
ToolGuard Core Access — Policy Store
======================================
Allow/block lists for paths and commands, shared by every guard.

The store never mutates a list in place. Each setter builds a new frozen
PolicySnapshot and swaps it in under a lock; a guard call reads the snapshot
reference once, so concurrent validations never see a half-applied update
and never wait on each other.

Import from: toolguard.core.access.policy
"""

import threading
from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from toolguard.core.constants import DEFAULT_BLOCKED_PATHS, DEFAULT_BLOCKED_COMMANDS


@dataclass(frozen=True)
class PolicySnapshot:
    allowed_paths: Tuple[str, ...] = ()
    blocked_paths: Tuple[str, ...] = DEFAULT_BLOCKED_PATHS
    allowed_commands: Tuple[str, ...] = ()
    blocked_commands: Tuple[str, ...] = DEFAULT_BLOCKED_COMMANDS


class PolicyStore:
    """Ordered allow/block lists with fluent, copy-on-write setters.

    Allow-lists are replaced (the caller's list is copied); block-lists are
    extended, so the seeded defaults can only grow.

    Usage:
        policy = (PolicyStore()
                  .with_allowed_paths(['/srv/workspace'])
                  .with_blocked_commands(['curl']))
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = PolicySnapshot()

    def snapshot(self) -> PolicySnapshot:
        return self._snapshot

    # ---- Setters (configuration phase) ----

    def with_allowed_paths(self, paths: Iterable[str]) -> 'PolicyStore':
        with self._lock:
            self._snapshot = replace(self._snapshot, allowed_paths=_copy(paths))
        return self

    def with_blocked_paths(self, paths: Iterable[str]) -> 'PolicyStore':
        with self._lock:
            current = self._snapshot
            self._snapshot = replace(current, blocked_paths=current.blocked_paths + _copy(paths))
        return self

    def with_allowed_commands(self, commands: Iterable[str]) -> 'PolicyStore':
        with self._lock:
            self._snapshot = replace(self._snapshot, allowed_commands=_copy(commands))
        return self

    def with_blocked_commands(self, commands: Iterable[str]) -> 'PolicyStore':
        with self._lock:
            current = self._snapshot
            self._snapshot = replace(current,
                                     blocked_commands=current.blocked_commands + _copy(commands))
        return self

    # ---- Read-only views ----

    @property
    def allowed_paths(self) -> Tuple[str, ...]:
        return self._snapshot.allowed_paths

    @property
    def blocked_paths(self) -> Tuple[str, ...]:
        return self._snapshot.blocked_paths

    @property
    def allowed_commands(self) -> Tuple[str, ...]:
        return self._snapshot.allowed_commands

    @property
    def blocked_commands(self) -> Tuple[str, ...]:
        return self._snapshot.blocked_commands

    def to_dict(self) -> dict:
        snap = self._snapshot
        return {
            'allowed_paths': list(snap.allowed_paths),
            'blocked_paths': list(snap.blocked_paths),
            'allowed_commands': list(snap.allowed_commands),
            'blocked_commands': list(snap.blocked_commands),
        }


def _copy(items: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(items, str):
        # A bare string would otherwise be split into characters
        return (items,)
    return tuple(items or ())


__all__ = ['PolicyStore', 'PolicySnapshot']
