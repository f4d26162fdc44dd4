from __future__ import annotations

"""
Core Merge Pipeline.

Coordinates one merge operation:
1. Validates the selection size (before any I/O).
2. Resolves the workspace root.
3. Builds the ignore filter from the workspace's rules.
4. Resolves the selection into a deduplicated file set.
5. Renders the tree and serializes the contents in parallel threads.
6. Joins both into the merged document.

Delivery (file or clipboard) is left to the caller.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import List, Optional, Sequence

from mergemaster.core.analysis.tree_generator import generate_tree_lines
from mergemaster.core.pipeline.components.ignore_filter import build_ignore_filter
from mergemaster.core.pipeline.stages.serializer import serialize_contents
from mergemaster.core.pipeline.stages.validator import validate_selection
from mergemaster.core.services.resolver import resolve_selection
from mergemaster.domain.constants import DOCUMENT_JOINER
from mergemaster.domain.merge_models import (
    MergeError,
    MergeIssue,
    MergeResult,
    NoWorkspaceError,
    PathRef,
    create_error_result,
    create_success_result,
)
from mergemaster.infra.fs import LocalFileSystem, resolve_workspace_root, to_relative_path

logger = logging.getLogger(__name__)


def merge(
        selection: Sequence[PathRef],
        *,
        respect_gitignore: bool = True,
        workspace_root: Optional[str] = None,
        fs: Optional[LocalFileSystem] = None,
        min_selection: int = 0,
        max_workers: Optional[int] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> MergeResult:
    """
    Merge the selected files and directories into one document.

    Fatal conditions (selection too small, no workspace, cancellation) yield
    an error result; per-entry failures are collected in ``issues`` and the
    merge still produces a document for everything that succeeded.

    Args:
        selection: Files and directories chosen by the user.
        respect_gitignore: Apply the workspace's .gitignore rules.
        workspace_root: Base directory for relative paths and ignore rules
            (current directory when empty).
        fs: Filesystem access layer (local disk by default).
        min_selection: Minimum number of selected entries required.
        max_workers: Size of the file reader pool.
        cancellation_event: Checked between directory and file operations.

    Returns:
        MergeResult: Result holding the document on success.
    """
    logger.info(f"Merge started for {len(selection)} selected item(s).")
    issues: List[MergeIssue] = []

    try:
        return _run_merge(
            selection,
            issues,
            respect_gitignore=respect_gitignore,
            workspace_root=workspace_root,
            fs=fs,
            min_selection=min_selection,
            max_workers=max_workers,
            cancellation_event=cancellation_event,
        )
    except MergeError as e:
        logger.error(f"Merge aborted: {e}")
        return create_error_result(str(e), resolve_workspace_root(workspace_root) or "", issues)


def produce_document(selection: Sequence[PathRef], **kwargs) -> str:
    """
    Merge and return the document text directly.

    Raises:
        MergeError: The specific fatal condition (NoWorkspaceError, ...).
    """
    return _run_merge(selection, [], **kwargs).document

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _run_merge(
        selection: Sequence[PathRef],
        issues: List[MergeIssue],
        *,
        respect_gitignore: bool = True,
        workspace_root: Optional[str] = None,
        fs: Optional[LocalFileSystem] = None,
        min_selection: int = 0,
        max_workers: Optional[int] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> MergeResult:
    """Merge body; raises MergeError subclasses on fatal conditions."""
    validate_selection(selection, min_selection)

    root = resolve_workspace_root(workspace_root)
    if root is None:
        raise NoWorkspaceError(
            f"No workspace folder is open: '{workspace_root or '.'}' is not a directory."
        )

    include = build_ignore_filter(root, respect_gitignore)
    file_set = resolve_selection(
        selection, include, fs=fs, issues=issues, cancellation_event=cancellation_event
    )
    to_relative = partial(to_relative_path, workspace_root=root)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="MergeEngine") as executor:
        future_tree = executor.submit(generate_tree_lines, file_set, to_relative)
        future_content = executor.submit(
            serialize_contents,
            file_set,
            to_relative,
            fs=fs,
            issues=issues,
            max_workers=max_workers,
            cancellation_event=cancellation_event,
        )
        tree_lines = future_tree.result()
        content, merged_files = future_content.result()

    tree = "".join(f"{line}\n" for line in tree_lines)
    document = f"{tree}{DOCUMENT_JOINER}{content}"

    summary = {
        "workspace_root": root,
        "selected": len(selection),
        "files": len(merged_files),
        "skipped": len(file_set) - len(merged_files),
        "issues": len(issues),
        "respect_gitignore": respect_gitignore,
        "characters": len(document),
    }
    logger.info(f"Merge completed: {len(merged_files)} file(s), {len(issues)} issue(s).")
    return create_success_result(root, document, merged_files, tree_lines, issues, summary)
