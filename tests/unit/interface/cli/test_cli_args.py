from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Unset options map to None so saved settings are not overridden.
3. Mutually exclusive delivery and gitignore flags.
"""

import pytest

from mergemaster.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_defaults_map_to_none():
    args = parse_args(["src"])
    overrides = args_to_overrides(args)

    assert args.paths == ["src"]
    assert all(v is None for v in overrides.values())
    assert args.clipboard is False
    assert args.stdout is False


def test_cli_flags_mapping():
    args = parse_args([
        "a.py", "docs",
        "-w", "/work/proj",
        "-o", "out.txt",
        "--no-gitignore",
        "--min-selection", "2",
        "--workers", "3",
    ])
    overrides = args_to_overrides(args)

    assert args.paths == ["a.py", "docs"]
    assert overrides == {
        "workspace_root": "/work/proj",
        "output_path": "out.txt",
        "respect_gitignore": False,
        "min_selection": 2,
        "max_workers": 3,
    }


def test_cli_respect_gitignore_flag():
    assert args_to_overrides(parse_args(["--respect-gitignore"]))["respect_gitignore"] is True


@pytest.mark.parametrize(
    "arg_list",
    [
        ["-o", "out.txt", "--clipboard"],
        ["--stdout", "--clipboard"],
        ["--no-gitignore", "--respect-gitignore"],
    ],
)
def test_cli_conflicting_flags_rejected(arg_list):
    with pytest.raises(SystemExit) as exc:
        parse_args(arg_list)
    assert exc.value.code == 2
