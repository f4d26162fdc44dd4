from __future__ import annotations

"""
Background Worker Threads for GUI Operations.

Runs the merge engine away from the Tk main loop so the window stays
responsive while large directories are walked and read. Results are handed
back through a callback; the controller marshals them onto the UI thread.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from mergemaster.core.pipeline.engine import merge
from mergemaster.infra.fs import to_path_refs

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# MERGE EXECUTION WORKER
# -----------------------------------------------------------------------------

def run_merge_task(
        selection: List[str],
        config: Dict[str, Any],
        on_complete: Callable[[Any], None],
        cancellation_event: Optional[threading.Event] = None
) -> None:
    """
    Execute one merge in a dedicated background thread.

    Args:
        selection: Paths chosen in the selection list.
        config: Session configuration (workspace, gitignore flag, workers).
        on_complete: Receives the MergeResult, the exception on a crash, or
            None when aborted before starting.
        cancellation_event: Event flag used to abort execution.
    """
    try:
        if cancellation_event and cancellation_event.is_set():
            logger.info("Merge Thread: Aborted by user before start.")
            on_complete(None)
            return

        refs, missing = to_path_refs(selection)
        for issue in missing:
            logger.warning(f"Merge Thread: Selection entry skipped: {issue.path} ({issue.error})")

        result = merge(
            refs,
            respect_gitignore=config.get("respect_gitignore", True),
            workspace_root=config.get("workspace_root") or None,
            min_selection=config.get("min_selection", 0),
            max_workers=config.get("max_workers"),
            cancellation_event=cancellation_event,
        )
        on_complete(result)

    except Exception as e:
        logger.critical(f"Merge Thread: Critical failure detected: {e}", exc_info=True)
        on_complete(e)
