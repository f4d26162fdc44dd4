from __future__ import annotations

"""
Content Serialization Stage.

Reads every file of the merge set concurrently and emits their delimited
blocks in a fixed order (sorted by relative path) regardless of the order
in which the reads complete. Files that cannot be read are skipped.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from mergemaster.core.pipeline.components.reader import read_file_content
from mergemaster.core.pipeline.components.writer import format_file_block
from mergemaster.domain.constants import DEFAULT_MAX_WORKERS
from mergemaster.domain.merge_models import MergeCancelledError, MergeIssue
from mergemaster.infra.fs import LocalFileSystem

logger = logging.getLogger(__name__)

# ==============================================================================
# PUBLIC API
# ==============================================================================

def order_files(file_set: Iterable[str], to_relative: Callable[[str], str]) -> List[Tuple[str, str]]:
    """
    Fix the document order of a file set.

    Files are sorted segment by segment, which is exactly the depth-first
    order of the rendered tree.

    Returns:
        List[Tuple[str, str]]: (relative path, absolute path) pairs, ties
        broken by absolute path.
    """
    pairs = [(to_relative(path), path) for path in file_set]
    pairs.sort(key=lambda pair: (pair[0].split("/"), pair[1]))
    return pairs


def serialize_contents(
        file_set: Iterable[str],
        to_relative: Callable[[str], str],
        *,
        fs: Optional[LocalFileSystem] = None,
        issues: Optional[List[MergeIssue]] = None,
        max_workers: Optional[int] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> Tuple[str, List[str]]:
    """
    Serialize a file set into concatenated content blocks.

    Args:
        file_set: Absolute paths of the files to merge.
        to_relative: Maps an absolute path to its RelativePath label.
        fs: Filesystem access layer (local disk by default).
        issues: Accumulator for unreadable files.
        max_workers: Size of the reader thread pool.
        cancellation_event: Checked before each read and once all reads finish.

    Returns:
        Tuple[str, List[str]]: (Concatenated blocks, relative paths actually serialized).

    Raises:
        MergeCancelledError: If cancellation was requested.
    """
    fs = fs or LocalFileSystem()
    issues = issues if issues is not None else []
    ordered = order_files(file_set, to_relative)

    if not ordered:
        return "", []

    collected: List[MergeIssue] = []
    futures: Dict[str, Future] = {}

    with ThreadPoolExecutor(
            max_workers=max_workers or DEFAULT_MAX_WORKERS,
            thread_name_prefix="MergeReader",
    ) as executor:
        for _rel, path in ordered:
            if _is_cancelled(cancellation_event):
                for pending in futures.values():
                    pending.cancel()
                raise MergeCancelledError("Merge cancelled by user.")
            futures[path] = executor.submit(_read_task, path, fs, cancellation_event)

    # A cancel that lands while reads are in flight must not yield a document
    if _is_cancelled(cancellation_event):
        raise MergeCancelledError("Merge cancelled by user.")

    blocks: List[str] = []
    merged: List[str] = []
    for rel, path in ordered:
        content, task_issues = futures[path].result()
        if content is None:
            collected.extend(task_issues)
            continue
        blocks.append(format_file_block(rel, content))
        merged.append(rel)

    issues.extend(collected)
    logger.info(f"Serialized {len(merged)} of {len(ordered)} file(s).")
    return "".join(blocks), merged

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_cancelled(event: Optional[threading.Event]) -> bool:
    return event is not None and event.is_set()


def _read_task(
        path: str,
        fs: LocalFileSystem,
        cancellation_event: Optional[threading.Event] = None,
) -> Tuple[Optional[str], List[MergeIssue]]:
    """Worker body; issues are returned rather than shared across threads."""
    if _is_cancelled(cancellation_event):
        return None, []
    task_issues: List[MergeIssue] = []
    content = read_file_content(path, fs, task_issues)
    return content, task_issues
