"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_PREFSTORE_ENV_VARS = (
    "PREFSTORE_BASE_DIR",
    "PREFSTORE_FILE_NAME",
    "PREFSTORE_FILE_EXTENSION",
    "PREFSTORE_LAYOUT",
    "PREFSTORE_SANITIZE_POLICY",
    "PREFSTORE_ATOMIC_WRITES",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_prefstore_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from prefstore variables set in the host environment."""
    for variable_name in _PREFSTORE_ENV_VARS:
        monkeypatch.delenv(variable_name, raising=False)
