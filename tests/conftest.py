from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the persisted configuration file.
3. Shared fixtures: a sample configuration and a small workspace on disk.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "gui: tests exercising GUI controllers with mocked widgets")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configuration store at a per-test temporary file."""
    from mergemaster.domain import config as cfg

    config_file = tmp_path / "mm_config" / "config.json"
    monkeypatch.setattr(cfg, "CONFIG_FILE", str(config_file))
    return config_file


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors the keys defined in 'mergemaster.domain.config'.
    """
    return {
        "respect_gitignore": True,
        "workspace_root": "",
        "output_path": "",
        "min_selection": 1,
        "max_workers": 4,
    }


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    Create a small project on disk.

    Structure:
    /proj
      .gitignore        (*.log)
      README.md
      /src
        a.ts
        b.ts
        debug.log
      /docs
        guide.md
    """
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "docs").mkdir()

    (root / ".gitignore").write_text("*.log\n", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")
    (root / "src" / "a.ts").write_text("export const a = 1;", encoding="utf-8")
    (root / "src" / "b.ts").write_text("export const b = 2;", encoding="utf-8")
    (root / "src" / "debug.log").write_text("noise", encoding="utf-8")
    (root / "docs" / "guide.md").write_text("Guide", encoding="utf-8")
    return root
