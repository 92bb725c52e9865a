"""
ToolGuard Configuration — GuardConfig
======================================
Central configuration dataclass with defaults for the policy lists,
audit logging and executor limits.

Sources, lowest to highest precedence:
  1. Dataclass defaults
  2. JSON file ($TOOLGUARD_CONFIG, or $TOOLGUARD_HOME/toolguard.json)
  3. Environment overrides (TOOLGUARD_ALLOWED_PATHS, ...)

Import from: toolguard.core.config
"""

import os
import json
import logging
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field, fields

from toolguard.core.types import ConfigError
from toolguard.core.version import CONFIG_SCHEMA_VERSION, CONFIG_FILENAME
from toolguard.core.constants import (
    COMMAND_TIMEOUT, FETCH_TIMEOUT, MAX_OUTPUT_LENGTH, MAX_FILE_SIZE_MB,
)

logger = logging.getLogger("toolguard.core.config")

_LIST_KEYS = ('allowed_paths', 'extra_blocked_paths',
              'allowed_commands', 'extra_blocked_commands')


@dataclass
class GuardConfig:
    allowed_paths: List[str] = field(default_factory=list)
    extra_blocked_paths: List[str] = field(default_factory=list)
    allowed_commands: List[str] = field(default_factory=list)
    extra_blocked_commands: List[str] = field(default_factory=list)

    base_dir: Path = field(default_factory=lambda: Path(os.environ.get('TOOLGUARD_HOME', '.')))
    log_dir: Optional[Path] = None
    log_level: str = "INFO"

    command_timeout: int = COMMAND_TIMEOUT
    fetch_timeout: int = FETCH_TIMEOUT
    max_output_length: int = MAX_OUTPUT_LENGTH
    max_file_size_mb: int = MAX_FILE_SIZE_MB

    def __post_init__(self):
        self.base_dir = Path(self.base_dir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)
        self.log_level = _check_log_level(self.log_level)
        for key in _LIST_KEYS:
            value = getattr(self, key)
            if isinstance(value, str) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key} must be a list of strings")
            setattr(self, key, list(value))

    @classmethod
    def from_dict(cls, data: dict) -> 'GuardConfig':
        data = dict(data)
        version = data.pop('schema_version', CONFIG_SCHEMA_VERSION)
        if str(version) != CONFIG_SCHEMA_VERSION:
            raise ConfigError(
                f"Unsupported schema_version {version!r} (expected {CONFIG_SCHEMA_VERSION})")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except (TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e

    @classmethod
    def from_file(cls, path) -> 'GuardConfig':
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file is not valid JSON: {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a JSON object: {path}")

        data.setdefault('base_dir', str(path.parent))
        logger.debug(f"Loaded config from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ=None) -> 'GuardConfig':
        """Build a config from the environment.

        TOOLGUARD_CONFIG names a JSON file; otherwise TOOLGUARD_HOME/toolguard.json
        is used when present. List overrides are os.pathsep-separated for paths
        and comma-separated for commands.
        """
        env = os.environ if environ is None else environ

        config_file = env.get('TOOLGUARD_CONFIG')
        home = env.get('TOOLGUARD_HOME')
        if config_file:
            cfg = cls.from_file(config_file)
        elif home and (Path(home) / CONFIG_FILENAME).is_file():
            cfg = cls.from_file(Path(home) / CONFIG_FILENAME)
        else:
            cfg = cls(base_dir=Path(home or '.'))

        if env.get('TOOLGUARD_ALLOWED_PATHS'):
            cfg.allowed_paths = _split(env['TOOLGUARD_ALLOWED_PATHS'], os.pathsep)
        if env.get('TOOLGUARD_ALLOWED_COMMANDS'):
            cfg.allowed_commands = _split(env['TOOLGUARD_ALLOWED_COMMANDS'], ',')
        if env.get('TOOLGUARD_LOG_DIR'):
            cfg.log_dir = Path(env['TOOLGUARD_LOG_DIR'])
        if env.get('TOOLGUARD_LOG_LEVEL'):
            cfg.log_level = _check_log_level(env['TOOLGUARD_LOG_LEVEL'])
        return cfg

    def to_dict(self) -> dict:
        return {
            'schema_version': CONFIG_SCHEMA_VERSION,
            'allowed_paths': list(self.allowed_paths),
            'extra_blocked_paths': list(self.extra_blocked_paths),
            'allowed_commands': list(self.allowed_commands),
            'extra_blocked_commands': list(self.extra_blocked_commands),
            'base_dir': str(self.base_dir),
            'log_dir': str(self.log_dir) if self.log_dir else None,
            'log_level': self.log_level,
            'command_timeout': self.command_timeout,
            'fetch_timeout': self.fetch_timeout,
            'max_output_length': self.max_output_length,
            'max_file_size_mb': self.max_file_size_mb,
        }


def _split(value: str, sep: str) -> List[str]:
    return [item.strip() for item in value.split(sep) if item.strip()]


def _check_log_level(level) -> str:
    if not isinstance(level, str):
        raise ConfigError(f"log_level must be a string, got {level!r}")
    level = level.upper()
    # getLevelName maps registered names to their numeric level
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log_level {level!r}")
    return level


__all__ = ['GuardConfig']
