"""
ToolGuard Entry Point — Run with: python -m toolguard

Check a target against the effective policy without performing the operation.

Usage:
    python -m toolguard [OPTIONS] path /srv/workspace/notes.txt
    python -m toolguard [OPTIONS] sanitize /srv//workspace/./notes.txt
    python -m toolguard [OPTIONS] command "git status"
    python -m toolguard [OPTIONS] url https://example.com
    python -m toolguard [OPTIONS] policy
    python -m toolguard version

Options:
    --config FILE         JSON config (default: $TOOLGUARD_CONFIG)
    --log-dir DIR         Write chain-hashed decision logs to DIR
    --allow-path P        Replace the path allow-list (repeatable)
    --block-path P        Add a blocked path prefix (repeatable)
    --allow-command C     Replace the command allow-list (repeatable)
    --block-command C     Add a blocked command pattern (repeatable)
    --json                Print the decision as JSON

Exit codes: 0 allowed, 1 denied by policy, 2 invalid input or config.
"""

import sys
import json
import argparse
from pathlib import Path

from toolguard.core.version import __version__
from toolguard.core.types import ActionType, ConfigError, ErrorKind
from toolguard.core.config import GuardConfig
from toolguard.core.audit.logger import SecurityLogger
from toolguard.core.validator import DefaultValidator

EXIT_ALLOWED = 0
EXIT_DENIED = 1
EXIT_INVALID = 2

_ACTIONS = {
    'path': ActionType.PATH_ACCESS,
    'sanitize': ActionType.PATH_ACCESS,
    'command': ActionType.COMMAND_EXEC,
    'url': ActionType.URL_FETCH,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='toolguard',
        description='Validate paths, commands and URLs against the ToolGuard policy.',
    )
    parser.add_argument('--config', help='JSON config file')
    parser.add_argument('--log-dir', help='Directory for decision logs')
    parser.add_argument('--allow-path', action='append', default=[], metavar='PATH')
    parser.add_argument('--block-path', action='append', default=[], metavar='PATH')
    parser.add_argument('--allow-command', action='append', default=[], metavar='PATTERN')
    parser.add_argument('--block-command', action='append', default=[], metavar='PATTERN')
    parser.add_argument('--json', action='store_true', help='Print the decision as JSON')

    sub = parser.add_subparsers(dest='cmd', required=True)
    for name, help_text in (('path', 'Validate a filesystem path'),
                            ('sanitize', 'Validate and print the cleaned path'),
                            ('command', 'Validate a command line'),
                            ('url', 'Validate a URL')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('target')
    sub.add_parser('policy', help='Print the effective policy as JSON')
    sub.add_parser('version', help='Print the version')
    return parser


def load_config(args) -> GuardConfig:
    cfg = GuardConfig.from_file(args.config) if args.config else GuardConfig.from_env()
    if args.log_dir:
        cfg.log_dir = Path(args.log_dir)
    if args.allow_path:
        cfg.allowed_paths = list(args.allow_path)
    if args.allow_command:
        cfg.allowed_commands = list(args.allow_command)
    cfg.extra_blocked_paths.extend(args.block_path)
    cfg.extra_blocked_commands.extend(args.block_command)
    return cfg


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.cmd == 'version':
        print(f"toolguard {__version__}")
        return EXIT_ALLOWED

    try:
        cfg = load_config(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_INVALID

    logger = SecurityLogger(cfg) if cfg.log_dir else None
    validator = DefaultValidator.from_config(cfg, logger=logger)

    if args.cmd == 'policy':
        print(json.dumps(validator.policy.to_dict(), indent=2))
        return EXIT_ALLOWED

    decision = validator.check(_ACTIONS[args.cmd], args.target)

    if args.json:
        print(json.dumps(decision.to_dict(), indent=2))
    elif decision.allowed:
        shown = decision.normalized if args.cmd == 'sanitize' else decision.target
        print(f"ALLOWED  {shown}")
    else:
        print(f"BLOCKED  {decision.target}  ({decision.reason})")

    if decision.allowed:
        return EXIT_ALLOWED
    if decision.kind is ErrorKind.VALIDATION:
        return EXIT_INVALID
    return EXIT_DENIED


if __name__ == "__main__":
    sys.exit(main() or 0)
