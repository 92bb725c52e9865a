"""
Tests for the chain-hashed decision log.
"""

import json
import sys

import pytest

from toolguard.core.types import ActionType, Decision
from toolguard.core.config import GuardConfig
from toolguard.core.audit.logger import SecurityLogger, GENESIS_HASH
from toolguard.core.validator import DefaultValidator


def _lines(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class TestSecurityLogger:

    def test_creates_log_dir(self, tmp_base):
        cfg = GuardConfig(base_dir=tmp_base, log_dir=tmp_base / "nested" / "logs")
        SecurityLogger(cfg)
        assert (tmp_base / "nested" / "logs").is_dir()

    def test_no_log_dir_writes_nothing(self, tmp_base):
        logger = SecurityLogger(GuardConfig(base_dir=tmp_base))
        logger.log_decision(Decision(ActionType.URL_FETCH, "https://example.com", True))
        assert logger.decision_log is None
        assert logger.stats["url_fetch_allowed"] == 1

    def test_decision_entry_fields(self, mock_logger):
        mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, "git status", True))
        entry = _lines(mock_logger.decision_log)[0]
        assert entry["action"] == "command_exec"
        assert entry["allowed"] is True
        assert entry["session_id"] == mock_logger.session_id
        assert entry["sequence"] == 1
        assert len(entry["chain_hash"]) == 64

    def test_blocked_decision_goes_to_both_logs(self, mock_logger):
        mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, "sudo ls", False,
                                          reason="command is blocked"))
        assert len(_lines(mock_logger.decision_log)) == 1
        blocked = _lines(mock_logger.blocked_log)
        assert blocked[0]["reason"] == "command is blocked"
        assert mock_logger.stats["blocked"] == 1
        assert mock_logger.stats["command_exec_blocked"] == 1

    def test_target_truncated(self, mock_logger):
        mock_logger.log_blocked("path_access", "/x" * 500, "path is blocked")
        entry = _lines(mock_logger.blocked_log)[0]
        assert len(entry["target"]) == 200

    def test_chain_verifies(self, mock_logger):
        for i in range(5):
            mock_logger.log_decision(Decision(ActionType.URL_FETCH, f"https://e{i}.com", True))
        assert SecurityLogger.verify_chain(mock_logger.decision_log) == []

    def test_first_entry_chains_from_genesis(self, mock_logger):
        mock_logger.log_decision(Decision(ActionType.URL_FETCH, "https://example.com", True))
        entry = _lines(mock_logger.decision_log)[0]
        stored = entry.pop("chain_hash")
        assert stored == SecurityLogger.chain_hash(GENESIS_HASH, json.dumps(entry, sort_keys=True))

    def test_tampering_detected(self, mock_logger):
        for i in range(3):
            mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, f"cmd{i}", True))
        lines = mock_logger.decision_log.read_text().splitlines()
        entry = json.loads(lines[1])
        entry["allowed"] = False
        lines[1] = json.dumps(entry)
        mock_logger.decision_log.write_text("\n".join(lines) + "\n")

        broken = SecurityLogger.verify_chain(mock_logger.decision_log)
        assert broken == [2], "CRITICAL: edited audit entry not reported on its own line"

    def test_deleted_line_detected(self, mock_logger):
        for i in range(3):
            mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, f"cmd{i}", True))
        lines = mock_logger.decision_log.read_text().splitlines()
        del lines[0]
        mock_logger.decision_log.write_text("\n".join(lines) + "\n")
        assert SecurityLogger.verify_chain(mock_logger.decision_log) == [1]

    def test_mixed_logs_each_verify(self, mock_logger):
        mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, "ls", True))
        mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, "rm x", False, reason="blocked"))
        mock_logger.log_decision(Decision(ActionType.COMMAND_EXEC, "ls -la", True))
        assert SecurityLogger.verify_chain(mock_logger.decision_log) == []
        assert SecurityLogger.verify_chain(mock_logger.blocked_log) == []

    def test_second_session_continues_chain(self, config):
        """A new logger appending to an existing log keeps it verifiable."""
        first = SecurityLogger(config)
        first.log_decision(Decision(ActionType.URL_FETCH, "https://a.example", True))
        first.log_decision(Decision(ActionType.COMMAND_EXEC, "sudo ls", False,
                                    reason="command is blocked"))

        second = SecurityLogger(config)
        second.log_decision(Decision(ActionType.URL_FETCH, "https://b.example", True))
        second.log_decision(Decision(ActionType.COMMAND_EXEC, "su", False,
                                     reason="command is blocked"))

        entries = _lines(second.decision_log)
        assert len(entries) == 4
        assert entries[0]["session_id"] != entries[2]["session_id"]
        assert SecurityLogger.verify_chain(second.decision_log) == [], (
            "CRITICAL: untouched log reported as tampered after a restart"
        )
        assert SecurityLogger.verify_chain(second.blocked_log) == []

    def test_last_chain_hash(self, mock_logger, tmp_base):
        assert SecurityLogger.last_chain_hash(tmp_base / "absent.log") == GENESIS_HASH
        mock_logger.log_decision(Decision(ActionType.URL_FETCH, "https://example.com", True))
        stored = _lines(mock_logger.decision_log)[-1]["chain_hash"]
        assert SecurityLogger.last_chain_hash(mock_logger.decision_log) == stored


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX paths")
class TestGuardLogging:
    """Guards report every decision to the logger they were given."""

    def test_allowed_and_blocked_recorded(self, audited_validator, mock_logger):
        audited_validator.validate_path("/home/user/notes.txt")
        with pytest.raises(Exception):
            audited_validator.validate_path("/etc/passwd")

        entries = _lines(mock_logger.decision_log)
        assert [e["allowed"] for e in entries] == [True, False]
        assert entries[1]["reason"] == "path is blocked"
        assert entries[1]["kind"] == "security"

    def test_silent_logger_receives_decisions(self, silent_logger):
        v = DefaultValidator(logger=silent_logger)
        v.validate_url("https://example.com")
        with pytest.raises(Exception):
            v.validate_command("sudo ls")

        decisions = [c.args[0] for c in silent_logger.log_decision.call_args_list]
        assert [d.allowed for d in decisions] == [True, False]
        assert decisions[1].action is ActionType.COMMAND_EXEC
        assert decisions[1].reason == "command is blocked"

    def test_no_logger_is_silent(self, validator, tmp_base):
        validator.validate_url("https://example.com")
        assert not any((tmp_base / "logs").iterdir())
