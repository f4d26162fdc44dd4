from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution, workspace
resolution, relative path labelling and the local access layer.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from mergemaster.domain.merge_models import PathKind
from mergemaster.infra.fs import (
    LocalFileSystem,
    get_user_data_dir,
    normalize_path,
    resolve_workspace_root,
    safe_mkdir,
    to_path_refs,
    to_relative_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "MergeMaster" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.mergemaster on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            with patch("os.makedirs"):
                path = get_user_data_dir().replace("\\", "/")
                assert path.endswith("/home/testuser/.mergemaster")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="/base") == os.path.abspath("/base")


def test_resolve_workspace_root(tmp_path: Path) -> None:
    assert resolve_workspace_root(str(tmp_path)) == str(tmp_path)
    assert resolve_workspace_root(str(tmp_path / "missing")) is None

    (tmp_path / "file.txt").write_text("x")
    assert resolve_workspace_root(str(tmp_path / "file.txt")) is None

    with patch("os.getcwd", return_value=str(tmp_path)):
        assert resolve_workspace_root("") == str(tmp_path)

# -----------------------------------------------------------------------------
# RELATIVE PATH LABELS
# -----------------------------------------------------------------------------

def test_to_relative_path_prefixes_root_name(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    target = root / "src" / "a.ts"
    assert to_relative_path(str(target), str(root)) == "proj/src/a.ts"


def test_to_relative_path_without_root() -> None:
    assert to_relative_path(os.path.join("x", "y", "file.md"), None) == "file.md"


def test_to_relative_path_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    outside = tmp_path / "shared" / "util.py"
    assert to_relative_path(str(outside), str(root)) == "proj/../shared/util.py"


def test_to_relative_path_different_drive() -> None:
    with patch("os.path.relpath", side_effect=ValueError("path is on mount 'D:'")):
        assert to_relative_path("/d/data/x.txt", "/c/proj") == "x.txt"

# -----------------------------------------------------------------------------
# ACCESS LAYER
# -----------------------------------------------------------------------------

def test_stat_and_path_refs(workspace: Path) -> None:
    fs = LocalFileSystem()
    assert fs.stat(str(workspace)) == PathKind.DIRECTORY
    assert fs.stat(str(workspace / "README.md")) == PathKind.FILE
    with pytest.raises(OSError):
        fs.stat(str(workspace / "ghost"))

    refs, issues = to_path_refs([str(workspace / "src"), str(workspace / "ghost")])
    assert [r.kind for r in refs] == [PathKind.DIRECTORY]
    assert len(issues) == 1 and issues[0].path.endswith("ghost")


def test_list_entries_sorted_with_kinds(workspace: Path) -> None:
    entries = LocalFileSystem().list_entries(str(workspace))
    assert entries == [
        (".gitignore", PathKind.FILE),
        ("README.md", PathKind.FILE),
        ("docs", PathKind.DIRECTORY),
        ("src", PathKind.DIRECTORY),
    ]


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="symlinks need POSIX")
def test_symlinked_directory_is_not_followed(workspace: Path) -> None:
    os.symlink(str(workspace), str(workspace / "src" / "loop"))
    os.symlink(str(workspace / "README.md"), str(workspace / "src" / "readme_link.md"))

    kinds = dict(LocalFileSystem().list_entries(str(workspace / "src")))
    assert kinds["loop"] is None
    assert kinds["readme_link.md"] == PathKind.FILE


def test_read_text_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        LocalFileSystem().read_text(str(tmp_path / "none.txt"))


# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS TESTS
# -----------------------------------------------------------------------------

def test_safe_mkdir_success(tmp_path: Path) -> None:
    """TC-04: Verify recursive directory creation."""
    target = tmp_path / "deep" / "nested" / "dir"
    success, err = safe_mkdir(str(target))

    assert success is True
    assert err is None
    assert target.exists()


def test_safe_mkdir_permission_error() -> None:
    """TC-04: Verify error handling when directory creation fails."""
    with patch("os.makedirs", side_effect=OSError("Permission Denied")):
        success, err = safe_mkdir("/root/forbidden")
        assert success is False
        assert "Permission Denied" in err
