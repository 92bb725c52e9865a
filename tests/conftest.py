"""
Shared pytest fixtures for the ToolGuard test suite.

Provides configs rooted in tmp_path, a real SecurityLogger writing to temp
logs, a fully-mocked logger, and validators with and without audit logging,
so unit tests run without filesystem side effects outside tmp_path.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import after path fix
from toolguard.core.config import GuardConfig
from toolguard.core.audit.logger import SecurityLogger
from toolguard.core.access.policy import PolicyStore
from toolguard.core.validator import DefaultValidator


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_base(tmp_path):
    """A resolved temporary base directory (tmp_path may sit behind a symlink)."""
    base = tmp_path.resolve()
    (base / "logs").mkdir()
    (base / "workspace").mkdir()
    return base


@pytest.fixture
def config(tmp_base):
    """A GuardConfig pointing at the temp directory."""
    return GuardConfig(base_dir=tmp_base, log_dir=tmp_base / "logs", log_level="DEBUG")


@pytest.fixture
def workspace(tmp_base):
    return tmp_base / "workspace"


# ---------------------------------------------------------------------------
# Logger fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_logger(config):
    """A real SecurityLogger writing to temp logs."""
    return SecurityLogger(config)


@pytest.fixture
def silent_logger():
    """A fully-mocked logger that records calls but writes nothing."""
    logger = MagicMock(spec=SecurityLogger)
    logger.session_id = "test-session-0000"
    return logger


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def policy():
    return PolicyStore()


@pytest.fixture
def validator():
    """Default validator: seeded block-lists, empty allow-lists, no logging."""
    return DefaultValidator()


@pytest.fixture
def audited_validator(mock_logger):
    return DefaultValidator(logger=mock_logger)


@pytest.fixture
def workspace_validator(workspace):
    """Validator restricted to the temp workspace."""
    return DefaultValidator().with_allowed_paths([str(workspace)])
