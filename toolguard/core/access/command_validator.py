#!/usr/bin/env python3
"""
ToolGuard Core Access — Command Validator
===========================================
Executable-name validation against glob block/allow lists.

Only the first whitespace-delimited token of the command line is checked,
reduced to its base name so '/usr/bin/rm' and './rm' both match 'rm'.
Shell metacharacters later in the line (';', '|', '&&', backticks,
redirection, substitution) are NOT inspected: 'echo hi; rm -rf /' passes.
Callers that hand the line to a shell must not treat this as an injection
filter.

Patterns use fnmatch syntax, matched case-sensitively: '*', '?', '[abc]',
and '[!abc]' for a negated class. '[^abc]' is NOT a negation here; it is a
class containing '^'. Write negated classes with '!'.

Import from: toolguard.core.access.command_validator
"""

import os
from fnmatch import fnmatchcase
from typing import List, Optional

from toolguard.core.types import ActionType, Decision, SecurityError, ValidationError
from toolguard.core.access.policy import PolicyStore


def command_base_name(token: str) -> str:
    stripped = token.rstrip('/')
    if not stripped:
        return '/'
    return os.path.basename(stripped)


class CommandValidator:
    def __init__(self, policy: PolicyStore, logger=None):
        self.policy = policy
        self.logger = logger

    def validate(self, command: str, args: Optional[List[str]] = None) -> str:
        """Validate a command line. Returns the executable base name or raises.

        ``args`` is accepted for call-site symmetry with the executor and is
        not inspected.
        """
        try:
            exe = self._check(command)
        except (ValidationError, SecurityError) as e:
            self._record(Decision.from_error(ActionType.COMMAND_EXEC, command, e))
            raise
        self._record(Decision(ActionType.COMMAND_EXEC, command, True, normalized=exe))
        return exe

    def _check(self, command: str) -> str:
        if not command:
            raise ValidationError("command cannot be empty")

        parts = command.split()
        if not parts:
            raise ValidationError("invalid command format")

        exe = command_base_name(parts[0])
        policy = self.policy.snapshot()

        for blocked in policy.blocked_commands:
            if fnmatchcase(exe, blocked):
                raise SecurityError(
                    "command is blocked",
                    "command is in the blocked list for security",
                )

        if policy.allowed_commands:
            if not any(fnmatchcase(exe, allowed) for allowed in policy.allowed_commands):
                raise SecurityError(
                    "command not allowed",
                    "command is not in the allowed list",
                )

        return exe

    def _record(self, decision: Decision) -> None:
        if self.logger is not None:
            self.logger.log_decision(decision)


__all__ = ['CommandValidator', 'command_base_name']
