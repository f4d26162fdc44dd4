from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and the merged document written to disk.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "mergemaster" / "main.py"


def run_cli(args: List[str], home: Path, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and redirects the home
    directory so no user configuration is read or written.

    Args:
        args: Command line arguments (excluding interpreter and script).
        home: Directory used as HOME / LOCALAPPDATA for the child process.
        cwd: Optional working directory for the subprocess.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)
    env["PYTHONIOENCODING"] = "utf-8"

    cmd = [sys.executable, str(ENTRY_POINT)] + args
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, encoding="utf-8")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


def test_cli_version(home: Path) -> None:
    result = run_cli(["--version"], home)
    assert result.returncode == 0
    assert "1.0.2" in result.stdout


def test_cli_merge_to_default_file(workspace: Path, home: Path) -> None:
    result = run_cli(["src", "README.md"], home, cwd=workspace)

    assert result.returncode == 0, result.stderr
    document = (workspace / "merged_output.txt").read_text(encoding="utf-8")
    assert document.startswith(
        "proj/\n├── README.md\n└── src/\n    ├── a.ts\n    └── b.ts\n\n\n\n"
    )
    assert document.count("<--- Start-File: ") == 3
    assert "Merged files saved to:" in result.stdout


def test_cli_stdout_delivery(workspace: Path, home: Path) -> None:
    result = run_cli(["docs", "--stdout"], home, cwd=workspace)

    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith("proj/\n└── docs/\n    └── guide.md\n\n\n\n")
    assert "<--- End-File: proj/docs/guide.md --->" in result.stdout
    assert not (workspace / "merged_output.txt").exists()


def test_cli_json_summary(workspace: Path, home: Path, tmp_path: Path) -> None:
    out = tmp_path / "merged.txt"
    result = run_cli(["docs", "--json", "-o", str(out), "-w", str(workspace)], home, cwd=workspace)

    assert result.returncode == 0, result.stderr
    summary = json.loads(result.stdout)
    assert summary["files"] == ["proj/docs/guide.md"]
    assert summary["destination"] == str(out)
    assert out.exists()


def test_cli_missing_workspace(tmp_path: Path, home: Path) -> None:
    result = run_cli([str(tmp_path), "-w", str(tmp_path / "missing")], home)
    assert result.returncode == 2
    assert "ERROR" in result.stderr


def test_cli_conflicting_sinks(home: Path) -> None:
    result = run_cli(["x", "--stdout", "--clipboard"], home)
    assert result.returncode == 2
    assert "not allowed with" in result.stderr
