from __future__ import annotations

"""
Output Delivery Sinks.

The merge engine is delivery-agnostic: it returns the composed document and
the caller picks where it goes. This module provides the two sinks offered
by the interfaces: persisting to a chosen file and placing the document on
the system clipboard.
"""

import logging
import os

import pyperclip

from mergemaster.domain.constants import DEFAULT_OUTPUT_NAME
from mergemaster.domain.merge_models import OutputDestinationError
from mergemaster.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE SINK
# -----------------------------------------------------------------------------

def default_output_path(workspace_root: str) -> str:
    """Suggested destination for an exported document."""
    return os.path.join(workspace_root, DEFAULT_OUTPUT_NAME)


def write_document(output_path: str, document: str) -> str:
    """
    Persist the merged document to disk.

    The document is written verbatim (UTF-8, no newline translation) so the
    file content is byte-identical across platforms.

    Args:
        output_path: Destination chosen by the user.
        document: Merged document text.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OutputDestinationError: If no destination was given or the write fails.
    """
    if not output_path or not output_path.strip():
        raise OutputDestinationError("No output destination was chosen.")

    target = os.path.abspath(output_path)
    ok, err = safe_mkdir(os.path.dirname(target))
    if not ok:
        raise OutputDestinationError(f"Cannot create output directory for '{target}': {err}")

    try:
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(document)
    except OSError as e:
        raise OutputDestinationError(f"Failed to write merged document to '{target}': {e}") from e

    logger.info(f"Merged document saved to: {target}")
    return target

# -----------------------------------------------------------------------------
# CLIPBOARD SINK
# -----------------------------------------------------------------------------

def copy_to_clipboard(document: str) -> None:
    """
    Place the merged document on the system clipboard.

    Raises:
        OutputDestinationError: If no clipboard mechanism is available.
    """
    try:
        pyperclip.copy(document)
    except pyperclip.PyperclipException as e:
        raise OutputDestinationError(f"System clipboard is not available: {e}") from e

    logger.info(f"Merged document copied to clipboard ({len(document)} characters).")
