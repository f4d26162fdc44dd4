from __future__ import annotations

"""
Content Block Formatting.

Produces the delimited per-file block of the merged document and parses
documents back into (path, content) pairs. The block layout is parsed by
external tools and must stay byte-exact:

    \\n
    ==================================================
    <--- Start-File: {path} --->
    ==================================================
    (blank line)
    {content}
    (blank line)
    ==================================================
    <--- End-File: {path} --->
    ==================================================
"""

import re
from typing import List, Tuple

from mergemaster.domain.constants import (
    END_FILE_TOKEN,
    SEPARATOR_LINE,
    START_FILE_TOKEN,
    TOKEN_TAIL,
)

_BLOCK_RE = re.compile(
    r"\n" + re.escape(SEPARATOR_LINE) + r"\n"
    + re.escape(START_FILE_TOKEN) + r"(?P<path>.*?)" + re.escape(TOKEN_TAIL) + r"\n"
    + re.escape(SEPARATOR_LINE) + r"\n\n"
    r"(?P<content>.*?)\n\n"
    + re.escape(SEPARATOR_LINE) + r"\n"
    + re.escape(END_FILE_TOKEN) + r"(?P=path)" + re.escape(TOKEN_TAIL) + r"\n"
    + re.escape(SEPARATOR_LINE) + r"\n",
    re.DOTALL,
)

# -----------------------------------------------------------------------------
# BLOCK FORMAT
# -----------------------------------------------------------------------------

def format_file_block(rel_path: str, content: str) -> str:
    """
    Wrap a file's content in its start/end delimiters.

    Args:
        rel_path: RelativePath label of the file.
        content: File content, embedded verbatim.

    Returns:
        str: The complete block.
    """
    return (
        f"\n{SEPARATOR_LINE}\n"
        f"{START_FILE_TOKEN}{rel_path}{TOKEN_TAIL}\n"
        f"{SEPARATOR_LINE}\n\n"
        f"{content}\n\n"
        f"{SEPARATOR_LINE}\n"
        f"{END_FILE_TOKEN}{rel_path}{TOKEN_TAIL}\n"
        f"{SEPARATOR_LINE}\n"
    )


def parse_blocks(document: str) -> List[Tuple[str, str]]:
    """
    Extract every (relative path, content) pair from a merged document.

    The end marker must repeat the start marker's path, so a file whose own
    content contains delimiter-like lines for another path is still
    recovered intact.

    Args:
        document: Merged document (or just its content section).

    Returns:
        List[Tuple[str, str]]: Pairs in document order.
    """
    return [(m.group("path"), m.group("content")) for m in _BLOCK_RE.finditer(document)]
