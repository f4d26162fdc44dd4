from __future__ import annotations

"""
File Reading Component.

Reads a merge candidate as text through the filesystem access layer.
Content must survive verbatim, so decoding is strict: a file that is not
valid UTF-8 is reported and skipped instead of being silently altered.
"""

import logging
from typing import List, Optional

from mergemaster.domain.merge_models import MergeIssue
from mergemaster.infra.fs import LocalFileSystem

logger = logging.getLogger(__name__)


def read_file_content(
        file_path: str,
        fs: Optional[LocalFileSystem] = None,
        issues: Optional[List[MergeIssue]] = None,
) -> Optional[str]:
    """
    Read a file's full text content.

    Args:
        file_path: Absolute path to the target file.
        fs: Filesystem access layer (local disk by default).
        issues: Accumulator for the failure, if any.

    Returns:
        Optional[str]: The content, or None if the file could not be read or decoded.
    """
    fs = fs or LocalFileSystem()
    try:
        return fs.read_text(file_path)
    except UnicodeDecodeError as e:
        error = f"Not valid UTF-8 text: {e.reason} at byte {e.start}"
    except OSError as e:
        error = str(e)

    logger.warning(f"Skipping {file_path}: {error}")
    if issues is not None:
        issues.append(MergeIssue(path=file_path, error=error))
    return None
