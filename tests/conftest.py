"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    src_path = PROJECT_ROOT / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def config():
    """Runtime config rooted at the repository with a small worker pool."""
    from core.config import TallyConfig

    return TallyConfig(data_root=PROJECT_ROOT, max_workers=2)
