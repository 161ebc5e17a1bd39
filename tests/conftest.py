"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from safepath.fileio.settings import get_default_config, set_default_config


@pytest.fixture(autouse=True)
def _restore_safe_io_defaults():
    """Undo changes a test makes to the process-wide safe I/O settings."""
    previous = get_default_config()
    yield
    set_default_config(previous)


@pytest.fixture
def original_content() -> bytes:
    """Known content for files under test, including a non-ASCII byte sequence."""
    return b"line one\nline two\n\xc3\xa9\n"


@pytest.fixture
def target_file(tmp_path: Path, original_content: bytes) -> Path:
    """An existing file holding original_content."""
    path = tmp_path / "target.log"
    path.write_bytes(original_content)
    return path


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    """Dedicated directory for backups so leftovers can be counted."""
    path = tmp_path / "backups"
    path.mkdir()
    return path
