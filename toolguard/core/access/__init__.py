"""
Access Control — Policy store, path validation, command validation.

Classes:
- PolicyStore: Allow/block lists with copy-on-write fluent setters
- PathValidator: Absolute-path check, lexical cleanup, symlink resolution, prefix lists
- CommandValidator: Executable base-name check against glob lists
"""

from toolguard.core.access.policy import PolicyStore, PolicySnapshot
from toolguard.core.access.path_validator import PathValidator, clean_path
from toolguard.core.access.command_validator import CommandValidator

__all__ = [
    'PolicyStore',
    'PolicySnapshot',
    'PathValidator',
    'clean_path',
    'CommandValidator',
]
