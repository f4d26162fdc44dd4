from __future__ import annotations

"""
Logging Settings.

One frozen settings object per process, with presets for the two
interfaces: the CLI logs to stderr only, the GUI also keeps a rotating
file in the user data directory. Records carry the thread name because
reads and merges run on worker threads.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Minimum severity name (DEBUG, INFO, WARNING, ...).
        console: Emit records on stderr.
        log_file: Rotating log file path, if any.
        max_bytes: Size that triggers a rollover.
        backup_count: Rolled-over files kept.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 512 * 1024
    backup_count: int = 3
    console_fmt: str = CONSOLE_FORMAT
    file_fmt: str = FILE_FORMAT
    datefmt: str = DATE_FORMAT

    @classmethod
    def for_cli(cls, debug: bool = False) -> "LoggingConfig":
        return cls(level="DEBUG" if debug else "INFO", console=True)

    @classmethod
    def for_gui(cls, log_file: str) -> "LoggingConfig":
        return cls(level="INFO", console=True, log_file=log_file)


def parse_level(level: Optional[str]) -> int:
    """Numeric level for a severity name; unknown names map to INFO."""
    name = str(level or "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name) if name else None
    return value if isinstance(value, int) else logging.INFO
