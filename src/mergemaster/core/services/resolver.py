from __future__ import annotations

"""
Selection Resolution Service.

Expands the user's selection (an arbitrary mix of files and directories,
possibly overlapping) into a flat, deduplicated set of absolute file paths.
The inclusion predicate is applied to every file before it is admitted;
directories are only traversed, never admitted or tested themselves.
"""

import logging
import os
import threading
from typing import Iterable, List, Optional, Set

from mergemaster.core.pipeline.components.ignore_filter import IncludePredicate
from mergemaster.domain.merge_models import (
    MergeCancelledError,
    MergeIssue,
    PathKind,
    PathRef,
)
from mergemaster.infra.fs import LocalFileSystem

logger = logging.getLogger(__name__)

# ==============================================================================
# PUBLIC API
# ==============================================================================

def resolve_selection(
        selection: Iterable[PathRef],
        include: IncludePredicate,
        *,
        fs: Optional[LocalFileSystem] = None,
        issues: Optional[List[MergeIssue]] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> Set[str]:
    """
    Resolve a selection into the set of files to merge.

    Unreadable directories are logged, recorded in ``issues`` and skipped;
    they never abort the resolution of the remaining selection.

    Args:
        selection: Ordered selection references.
        include: Inclusion predicate (from the ignore filter).
        fs: Filesystem access layer (local disk by default).
        issues: Accumulator for recoverable failures.
        cancellation_event: Checked between directory and file operations.

    Returns:
        Set[str]: Absolute file paths (the FileSet).

    Raises:
        MergeCancelledError: If the cancellation event is set mid-resolution.
    """
    fs = fs or LocalFileSystem()
    issues = issues if issues is not None else []
    file_set: Set[str] = set()

    for ref in selection:
        _check_cancelled(cancellation_event)

        if ref.kind == PathKind.FILE:
            if include(ref.path):
                file_set.add(ref.path)
            else:
                logger.debug(f"Excluded by ignore rules: {ref.path}")
        elif ref.kind == PathKind.DIRECTORY:
            for file_path in _walk_files(ref.path, fs, issues, cancellation_event):
                if include(file_path):
                    file_set.add(file_path)
                else:
                    logger.debug(f"Excluded by ignore rules: {file_path}")

    logger.info(f"Selection resolved to {len(file_set)} file(s).")
    return file_set

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk_files(
        root: str,
        fs: LocalFileSystem,
        issues: List[MergeIssue],
        cancellation_event: Optional[threading.Event],
) -> Iterable[str]:
    """Depth-first enumeration of every descendant file of ``root``."""
    pending: List[str] = [root]

    while pending:
        _check_cancelled(cancellation_event)
        current = pending.pop()

        try:
            entries = fs.list_entries(current)
        except OSError as e:
            logger.warning(f"Error reading directory {current}: {e}")
            issues.append(MergeIssue(path=current, error=str(e)))
            continue

        subdirs: List[str] = []
        for name, kind in entries:
            child = os.path.join(current, name)
            if kind == PathKind.FILE:
                yield child
            elif kind == PathKind.DIRECTORY:
                subdirs.append(child)

        # Reversed so the stack pops subdirectories in listing order
        pending.extend(reversed(subdirs))


def _check_cancelled(event: Optional[threading.Event]) -> None:
    if event is not None and event.is_set():
        raise MergeCancelledError("Merge cancelled by user.")
