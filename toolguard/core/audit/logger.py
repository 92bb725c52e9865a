#!/usr/bin/env python3
"""
ToolGuard Core Audit — Security Logger
========================================
Tamper-evident decision logging with:
- Chain hashing for integrity
- Separate blocked-decision log
- Per-action allow/deny counters

Console output goes through the standard ``logging`` module; the JSON-lines
files are only written when the config names a log directory.

Import from: toolguard.core.audit.logger
"""

import json
import hashlib
import secrets
import logging
import threading
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional
from collections import defaultdict

from toolguard.core.types import Decision
from toolguard.core.constants import SESSION_ID_BYTES, MAX_LOGGED_TARGET

GENESIS_HASH = "0" * 64


class SecurityLogger:
    """Tamper-evident logging of guard decisions."""

    def __init__(self, config=None):
        self.config = config
        self.log_dir: Optional[Path] = getattr(config, 'log_dir', None)

        self.decision_log = None
        self.blocked_log = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.decision_log = self.log_dir / "decisions.log"
            self.blocked_log = self.log_dir / "blocked.log"

        self.session_id = secrets.token_hex(SESSION_ID_BYTES)
        self.entry_counter = 0
        # One chain per file so each log verifies on its own
        self.previous_hash: Dict[Path, str] = defaultdict(lambda: GENESIS_HASH)
        self.stats = defaultdict(int)
        self._lock = threading.Lock()

        logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(message)s')
        self.logger = logging.getLogger('toolguard')
        level = getattr(config, 'log_level', None)
        if level:
            self.logger.setLevel(level)

        # Continue the chain of logs left by earlier sessions
        for log_file in (self.decision_log, self.blocked_log):
            if log_file is not None:
                self.previous_hash[log_file] = self.last_chain_hash(log_file)

    @staticmethod
    def chain_hash(previous_hash: str, entry: str) -> str:
        return hashlib.sha256(f"{previous_hash}:{entry}".encode()).hexdigest()

    @staticmethod
    def last_chain_hash(log_file: Path) -> str:
        """chain_hash of the last entry in a log file, or GENESIS_HASH if none."""
        last = None
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        last = line
        except FileNotFoundError:
            return GENESIS_HASH
        if last is None:
            return GENESIS_HASH
        try:
            return json.loads(last).get('chain_hash') or GENESIS_HASH
        except (ValueError, AttributeError):
            return GENESIS_HASH

    def _write(self, log_file: Optional[Path], entry: Dict) -> None:
        if log_file is None:
            return
        with self._lock:
            self.entry_counter += 1
            entry.update({
                'timestamp': datetime.now().isoformat(),
                'session_id': self.session_id,
                'sequence': self.entry_counter
            })
            entry_str = json.dumps(entry, sort_keys=True)
            entry['chain_hash'] = self.chain_hash(self.previous_hash[log_file], entry_str)
            self.previous_hash[log_file] = entry['chain_hash']

            try:
                with open(log_file, 'a', encoding='utf-8') as f:
                    f.write(json.dumps(entry) + '\n')
            except OSError as e:
                self.logger.warning(f"Audit log write failed: {e}")

    def log_decision(self, decision: Decision) -> None:
        action = decision.action.value
        outcome = 'allowed' if decision.allowed else 'blocked'
        with self._lock:
            self.stats[f'{action}_{outcome}'] += 1

        self._write(self.decision_log, {
            'action': action,
            'target': decision.target[:MAX_LOGGED_TARGET],
            'allowed': decision.allowed,
            'reason': decision.reason,
            'kind': decision.kind.value if decision.kind else None,
        })

        if decision.allowed:
            self.logger.debug(f"ALLOWED: {action} | {decision.target[:MAX_LOGGED_TARGET]}")
        else:
            self.log_blocked(action, decision.target, decision.reason)

    def log_blocked(self, action: str, target: str, reason: str) -> None:
        target = target[:MAX_LOGGED_TARGET]
        self._write(self.blocked_log, {'action': action, 'target': target, 'reason': reason})
        with self._lock:
            self.stats['blocked'] += 1
        self.logger.warning(f"BLOCKED: {action} | {reason}")

    @classmethod
    def verify_chain(cls, log_file) -> List[int]:
        """Recompute the hash chain of one log file.

        Returns the line numbers (1-based) whose chain_hash does not match.
        Each line is checked against the stored hash of the line before it,
        so an edited line is reported by itself and a removed line is
        reported at the entry that followed it.
        """
        broken = []
        previous = GENESIS_HASH
        with open(log_file, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                entry = json.loads(line)
                stored = entry.pop('chain_hash', None)
                entry_str = json.dumps(entry, sort_keys=True)
                if stored != cls.chain_hash(previous, entry_str):
                    broken.append(lineno)
                previous = stored
        return broken


__all__ = ['SecurityLogger', 'GENESIS_HASH']
