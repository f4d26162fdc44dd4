from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the filesystem access layer consumed by the merge engine (stat,
directory listing, text/bytes reads), workspace root resolution, and the
cross-platform path helpers used to express files relative to that root.
"""

import os
import stat
from typing import Iterable, List, Optional, Tuple

from mergemaster.domain.constants import APP_NAME
from mergemaster.domain.merge_models import MergeIssue, PathKind, PathRef

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = APP_NAME
UNIX_APP_DIR_NAME = ".mergemaster"

# -----------------------------------------------------------------------------
# FILESYSTEM ACCESS LAYER
# -----------------------------------------------------------------------------

class LocalFileSystem:
    """
    Access layer over the local disk.

    Any object exposing the same four methods can be handed to the engine
    instead (e.g. an in-memory fake in tests).
    """

    def stat(self, path: str) -> Optional[PathKind]:
        """
        Classify a path, following symbolic links.

        Raises:
            OSError: If the path does not exist or cannot be inspected.

        Returns:
            Optional[PathKind]: None for entries that are neither file nor directory.
        """
        st = os.stat(path)
        if stat.S_ISDIR(st.st_mode):
            return PathKind.DIRECTORY
        if stat.S_ISREG(st.st_mode):
            return PathKind.FILE
        return None

    def list_entries(self, path: str) -> List[Tuple[str, Optional[PathKind]]]:
        """
        List the direct children of a directory as (name, kind) pairs.

        Symlinked directories are reported without a kind so recursion
        never follows them (prevents cycles). Symlinked files are kept.

        Raises:
            OSError: If the directory cannot be read.
        """
        entries: List[Tuple[str, Optional[PathKind]]] = []
        with os.scandir(path) as it:
            for entry in it:
                kind: Optional[PathKind] = None
                try:
                    if entry.is_dir(follow_symlinks=False):
                        kind = PathKind.DIRECTORY
                    elif entry.is_file():
                        kind = PathKind.FILE
                except OSError:
                    kind = None
                entries.append((entry.name, kind))
        entries.sort()
        return entries

    def read_text(self, path: str) -> str:
        """
        Read a file as strict UTF-8 text, verbatim (no newline translation).

        Raises:
            OSError: On read failure.
            UnicodeDecodeError: If the content is not valid UTF-8.
        """
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()


# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/MergeMaster
    - Linux/Mac: ~/.mergemaster

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_workspace_root(candidate: Optional[str]) -> Optional[str]:
    """
    Resolve the base directory for relative paths and ignore rules.

    An empty candidate means the current working directory.

    Args:
        candidate: Raw workspace path supplied by the host.

    Returns:
        Optional[str]: Absolute root directory, or None if it is not a directory.
    """
    root = normalize_path(candidate, os.getcwd())
    if not os.path.isdir(root):
        return None
    return root


def to_relative_path(path: str, workspace_root: Optional[str]) -> str:
    """
    Express a file path relative to the workspace, prefixed with the root's name.

    Separators are always forward slashes. Without a workspace root (or when
    the path lives on another drive) the file's base name is returned.

    Args:
        path: Absolute file path.
        workspace_root: Absolute workspace root, if known.

    Returns:
        str: Root-name-prefixed relative path.
    """
    if not workspace_root:
        return os.path.basename(path)

    try:
        rel = os.path.relpath(path, workspace_root)
    except ValueError:
        return os.path.basename(path)

    root_name = os.path.basename(os.path.normpath(workspace_root))
    rel = rel.replace(os.sep, "/")
    if os.altsep:
        rel = rel.replace(os.altsep, "/")
    return f"{root_name}/{rel}"


def to_path_refs(
        paths: Iterable[str],
        fs: Optional[LocalFileSystem] = None,
) -> Tuple[List[PathRef], List[MergeIssue]]:
    """
    Build selection references for raw path strings.

    Args:
        paths: Raw paths chosen by the user.
        fs: Filesystem access layer (local disk by default).

    Returns:
        Tuple[List[PathRef], List[MergeIssue]]: (References, paths that could not be classified).
    """
    fs = fs or LocalFileSystem()
    refs: List[PathRef] = []
    issues: List[MergeIssue] = []

    for raw in paths:
        abs_path = normalize_path(raw, os.getcwd())
        try:
            kind = fs.stat(abs_path)
        except OSError as e:
            issues.append(MergeIssue(path=abs_path, error=str(e)))
            continue
        if kind is None:
            issues.append(MergeIssue(path=abs_path, error="Not a regular file or directory."))
            continue
        refs.append(PathRef(path=abs_path, kind=kind))

    return refs, issues


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
