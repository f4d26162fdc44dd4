from __future__ import annotations

"""
Unit tests for the CLI application controller.

Runs 'main' in-process against a temporary workspace and checks exit
codes, delivery sinks and rendered reports.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mergemaster.domain import config as cfg
from mergemaster.domain.merge_models import OutputDestinationError
from mergemaster.infra.logging import shutdown_logging
from mergemaster.interface.cli.app import main

EXPECTED_TREE = "proj/\n└── src/\n    ├── a.ts\n    └── b.ts\n"


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers bound to pytest's captured streams."""
    yield
    shutdown_logging()


def test_export_to_default_output(workspace: Path) -> None:
    code = main([str(workspace / "src"), "-w", str(workspace), "--use-defaults"])
    assert code == 0

    output = workspace / "merged_output.txt"
    document = output.read_text(encoding="utf-8")
    assert document.startswith(EXPECTED_TREE + "\n\n\n")
    assert "<--- Start-File: proj/src/a.ts --->" in document
    assert "debug.log" not in document


def test_export_to_explicit_output(workspace: Path, tmp_path: Path, capsys) -> None:
    target = tmp_path / "out" / "merged.txt"
    code = main([str(workspace / "src"), "-w", str(workspace), "-o", str(target)])

    assert code == 0
    assert target.exists()
    assert str(target) in capsys.readouterr().out


def test_stdout_delivery(workspace: Path, capsys) -> None:
    code = main([str(workspace / "src"), "-w", str(workspace), "--stdout"])
    captured = capsys.readouterr()

    assert code == 0
    assert captured.out.startswith(EXPECTED_TREE)
    assert "Merge completed successfully." in captured.err


def test_no_gitignore_includes_ignored_files(workspace: Path, capsys) -> None:
    code = main([str(workspace / "src"), "-w", str(workspace), "--stdout", "--no-gitignore"])
    assert code == 0
    assert "<--- Start-File: proj/src/debug.log --->" in capsys.readouterr().out


def test_clipboard_delivery(workspace: Path, capsys) -> None:
    with patch("mergemaster.interface.cli.app.copy_to_clipboard") as mock_copy:
        code = main([str(workspace / "README.md"), "-w", str(workspace), "--clipboard"])

    assert code == 0
    document = mock_copy.call_args[0][0]
    assert document.startswith("proj/\n└── README.md\n")
    assert "copied to clipboard" in capsys.readouterr().out


def test_clipboard_unavailable_returns_failure(workspace: Path, capsys) -> None:
    with patch(
        "mergemaster.interface.cli.app.copy_to_clipboard",
        side_effect=OutputDestinationError("System clipboard is not available"),
    ):
        code = main([str(workspace), "-w", str(workspace), "-c"])

    assert code == 1
    assert "clipboard is not available" in capsys.readouterr().err


def test_empty_selection_is_usage_error(capsys) -> None:
    assert main(["--use-defaults"]) == 2
    assert "Select at least 1 item" in capsys.readouterr().err


def test_missing_workspace_is_usage_error(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path), "-w", str(tmp_path / "nope")])
    assert code == 2
    assert "No workspace folder" in capsys.readouterr().err


def test_json_summary(workspace: Path, capsys) -> None:
    code = main([str(workspace), "-w", str(workspace), "--json", "-o", str(workspace / "m.txt")])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["ok"] is True
    assert "document" not in payload
    assert payload["files"] == [
        "proj/.gitignore",
        "proj/README.md",
        "proj/docs/guide.md",
        "proj/src/a.ts",
        "proj/src/b.ts",
    ]


def test_missing_selection_entry_is_reported(workspace: Path, capsys) -> None:
    code = main([
        str(workspace / "README.md"), str(workspace / "ghost.txt"),
        "-w", str(workspace), "--json", "-o", str(workspace / "m.txt"),
    ])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["files"] == ["proj/README.md"]
    assert payload["unresolved"][0]["path"].endswith("ghost.txt")


def test_dump_config_reflects_overrides(capsys) -> None:
    assert main(["--dump-config", "--no-gitignore", "--workers", "2"]) == 0
    conf = json.loads(capsys.readouterr().out)
    assert conf["respect_gitignore"] is False
    assert conf["max_workers"] == 2


def test_save_config_persists_settings(isolated_config_file: Path) -> None:
    assert main(["--dump-config", "--save-config", "--no-gitignore"]) == 0
    assert isolated_config_file.exists()
    assert cfg.load_config()["respect_gitignore"] is False


def test_keyboard_interrupt_exit_code(workspace: Path) -> None:
    with patch("mergemaster.interface.cli.app.merge", side_effect=KeyboardInterrupt):
        assert main([str(workspace), "-w", str(workspace)]) == 130
