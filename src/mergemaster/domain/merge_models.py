from __future__ import annotations

"""
Merge Domain Data Models.

Defines the selection references consumed by the engine, the per-entry
issue records collected during a merge, the fatal error hierarchy, and
the unified result object handed back to the interface layers (CLI/GUI).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# SELECTION MODELS
# -----------------------------------------------------------------------------

class PathKind(str, Enum):
    """Discriminator for filesystem entries relevant to a merge."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class PathRef:
    """
    A single entry of the user's selection.

    Attributes:
        path: Absolute filesystem path.
        kind: Whether the entry is a file or a directory.
    """
    path: str
    kind: PathKind


@dataclass(frozen=True)
class MergeIssue:
    """
    Recoverable failure recorded while resolving or reading an entry.

    Attributes:
        path: Absolute path of the entry that was skipped.
        error: Descriptive exception or error message.
    """
    path: str
    error: str

# -----------------------------------------------------------------------------
# FATAL ERRORS
# -----------------------------------------------------------------------------

class MergeError(Exception):
    """Base class for conditions that abort a merge before any output."""


class NoWorkspaceError(MergeError):
    """No workspace root could be resolved."""


class SelectionTooSmallError(MergeError):
    """The selection holds fewer entries than the host requires."""


class OutputDestinationError(MergeError):
    """The merged document could not be delivered to its destination."""


class MergeCancelledError(MergeError):
    """The merge was cancelled between two I/O operations."""

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MergeResult:
    """
    Unified result of a merge operation.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        workspace_root: Root directory relative paths were computed against.
        document: The merged document (empty on failure).
        files: Relative paths of the merged files, in document order.
        tree_lines: Lines of the rendered directory tree.
        issues: Recoverable failures encountered along the way.
        summary: Execution counters for reporting.
    """
    ok: bool
    error: str
    workspace_root: str
    document: str = ""
    files: List[str] = field(default_factory=list)
    tree_lines: List[str] = field(default_factory=list)
    issues: List[MergeIssue] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        workspace_root: str = "",
        issues: Optional[List[MergeIssue]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> MergeResult:
    """
    Create a failed merge result instance.

    Args:
        error: Specific, actionable error description.
        workspace_root: Root directory if it was resolved before failing.
        issues: Recoverable issues collected before the failure.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        MergeResult: An immutable error result object.
    """
    return MergeResult(
        ok=False,
        error=error,
        workspace_root=workspace_root,
        issues=issues or [],
        summary=summary_extra or {},
    )


def create_success_result(
        workspace_root: str,
        document: str,
        files: List[str],
        tree_lines: List[str],
        issues: Optional[List[MergeIssue]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> MergeResult:
    """
    Create a successful merge result instance.

    Args:
        workspace_root: Root directory used for relative paths.
        document: The composed merged document.
        files: Relative paths of the merged files.
        tree_lines: Rendered tree lines.
        issues: Recoverable issues (skipped entries).
        summary_extra: Final execution counters.

    Returns:
        MergeResult: An immutable success result object.
    """
    return MergeResult(
        ok=True,
        error="",
        workspace_root=workspace_root,
        document=document,
        files=files,
        tree_lines=tree_lines,
        issues=issues or [],
        summary=summary_extra or {},
    )
