from __future__ import annotations

"""
Domain Constants.

Centralizes the literal tokens of the merged document format and the
application-wide defaults shared by the engine and the interface layers.
The separator tokens are a compatibility surface: external tools parse
merged documents by these exact strings.
"""

CURRENT_VERSION = "1.0.2"
APP_NAME = "MergeMaster"

# -----------------------------------------------------------------------------
# DOCUMENT FORMAT
# -----------------------------------------------------------------------------

SEPARATOR_WIDTH = 50
SEPARATOR_LINE = "=" * SEPARATOR_WIDTH
START_FILE_TOKEN = "<--- Start-File: "
END_FILE_TOKEN = "<--- End-File: "
TOKEN_TAIL = " --->"

# Joins the tree summary and the content blocks
DOCUMENT_JOINER = "\n\n\n"

# -----------------------------------------------------------------------------
# TREE GLYPHS
# -----------------------------------------------------------------------------

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "
DIR_SUFFIX = "/"

# -----------------------------------------------------------------------------
# HOST DEFAULTS
# -----------------------------------------------------------------------------

IGNORE_FILE_NAME = ".gitignore"
DEFAULT_OUTPUT_NAME = "merged_output.txt"
DEFAULT_MIN_SELECTION = 1
DEFAULT_MAX_WORKERS = 8
