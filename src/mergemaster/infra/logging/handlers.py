from __future__ import annotations

"""
Logging Handler Factories.

Builds the sink handlers fed by the queue listener and tags them, so that
re-configuration only detaches handlers owned by this application and
leaves library- or test-injected handlers (e.g. pytest's caplog) alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_mergemaster_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by this application."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    """stderr handler; stdout stays reserved for documents printed by the CLI."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    return tag_handler(sh)


def create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Initialize a RotatingFileHandler.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Formatter for file entries.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[RotatingFileHandler]: Configured handler or None if the file cannot be opened.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    tag_handler(fh)
    return fh
