#!/usr/bin/env python3
"""
ToolGuard Core — Validator
============================
The object tool handlers hold. One instance is built at startup, optionally
narrowed through the chainable ``with_*`` setters, then shared read-only by
every handler.

Usage:
    validator = (DefaultValidator()
                 .with_allowed_paths(['/srv/workspace'])
                 .with_allowed_commands(['git*', 'npm*']))

    path = validator.sanitize_path(request_path)   # raises GuardError
    validator.validate_command(command_line)
    validator.validate_url(url)

Import from: toolguard.core.validator
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from toolguard.core.types import ActionType, Decision, GuardError
from toolguard.core.access.policy import PolicyStore
from toolguard.core.access.path_validator import PathValidator, clean_path
from toolguard.core.access.command_validator import CommandValidator
from toolguard.core.network.url_validator import URLValidator


class Validator(ABC):
    """Interface consumed by tool handlers."""

    @abstractmethod
    def validate_path(self, path: str) -> None: ...

    @abstractmethod
    def validate_command(self, command: str, args: Optional[List[str]] = None) -> None: ...

    @abstractmethod
    def validate_url(self, url: str) -> None: ...

    @abstractmethod
    def sanitize_path(self, path: str) -> str: ...


class DefaultValidator(Validator):
    """Validator backed by a PolicyStore seeded with secure defaults."""

    def __init__(self, policy: Optional[PolicyStore] = None, logger=None):
        self.policy = policy or PolicyStore()
        self.logger = logger
        self.path_validator = PathValidator(self.policy, logger)
        self.command_validator = CommandValidator(self.policy, logger)
        self.url_validator = URLValidator(logger)

    @classmethod
    def from_config(cls, config, logger=None) -> 'DefaultValidator':
        validator = cls(logger=logger)
        if config.allowed_paths:
            validator.with_allowed_paths(config.allowed_paths)
        if config.extra_blocked_paths:
            validator.with_blocked_paths(config.extra_blocked_paths)
        if config.allowed_commands:
            validator.with_allowed_commands(config.allowed_commands)
        if config.extra_blocked_commands:
            validator.with_blocked_commands(config.extra_blocked_commands)
        return validator

    # ---- Configuration ----

    def with_allowed_paths(self, paths: Iterable[str]) -> 'DefaultValidator':
        self.policy.with_allowed_paths(paths)
        return self

    def with_blocked_paths(self, paths: Iterable[str]) -> 'DefaultValidator':
        self.policy.with_blocked_paths(paths)
        return self

    def with_allowed_commands(self, commands: Iterable[str]) -> 'DefaultValidator':
        self.policy.with_allowed_commands(commands)
        return self

    def with_blocked_commands(self, commands: Iterable[str]) -> 'DefaultValidator':
        self.policy.with_blocked_commands(commands)
        return self

    # ---- Guards ----

    def validate_path(self, path: str) -> None:
        self.path_validator.validate(path)

    def validate_command(self, command: str, args: Optional[List[str]] = None) -> None:
        self.command_validator.validate(command, args)

    def validate_url(self, url: str) -> None:
        self.url_validator.validate(url)

    def sanitize_path(self, path: str) -> str:
        return self.path_validator.sanitize(path)

    def check(self, action: ActionType, target: str) -> Decision:
        """Run one guard and report the outcome instead of raising."""
        try:
            if action is ActionType.PATH_ACCESS:
                self.validate_path(target)
                normalized = clean_path(target)
            elif action is ActionType.COMMAND_EXEC:
                normalized = self.command_validator.validate(target)
            elif action is ActionType.URL_FETCH:
                normalized = self.url_validator.validate(target)
            else:
                raise ValueError(f"Unknown action: {action!r}")
        except GuardError as e:
            return Decision.from_error(action, target, e)
        return Decision(action, target, True, normalized=normalized)


__all__ = ['Validator', 'DefaultValidator']
