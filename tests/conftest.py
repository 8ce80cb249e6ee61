"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest

from workmatch.logging.context import clear_log_context
from workmatch.persistence import close_database, init_database

DEMO_DATASET = Path(__file__).resolve().parent.parent / "data" / "demo_dataset.yaml"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables out of configuration tests."""
    for name in ("DATABASE_URL", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def test_database(tmp_path):
    """Initialize a file-backed SQLite database for one test."""
    db_url = f"sqlite:///{tmp_path / 'workmatch_test.db'}"
    init_database(db_url)
    yield db_url
    close_database()


@pytest.fixture
def demo_dataset_path():
    return DEMO_DATASET
