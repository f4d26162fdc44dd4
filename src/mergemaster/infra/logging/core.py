from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. Records are
pushed through a single QueueHandler on the root logger and drained by a
QueueListener thread, so file writes never block the merge or the GUI loop.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from mergemaster.infra.fs import get_user_data_dir
from mergemaster.infra.logging.config import LoggingConfig, parse_level
from mergemaster.infra.logging.handlers import (
    create_console_handler,
    create_rotating_file_handler,
    is_our_handler,
    tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_mergemaster_configured"
_QUEUE_LISTENER_ATTR: str = "_mergemaster_queue_listener"

# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "mergemaster.log") -> str:
    """Resolve the persistent log path within the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, using non-blocking queue-based I/O.

    Subsequent calls are no-ops unless ``force`` is set, in which case our
    previous handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level_int = parse_level(cfg.level)
        root.setLevel(level_int)

        shutdown_logging()

        sinks: List[logging.Handler] = []
        if cfg.console:
            sinks.append(create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
        if cfg.log_file:
            fh = create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                sinks.append(fh)

        if not sinks:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()

        root.addHandler(tag_handler(QueueHandler(log_queue)))
        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        atexit.register(_stop_listener, listener)
        return root

    except Exception:
        # Emergency console so diagnostics are never lost entirely
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        root.addHandler(tag_handler(sh))
        root.warning("Logging infrastructure failed. Switched to emergency console.")
        return root


def shutdown_logging() -> None:
    """Flush and detach every handler installed by configure_logging."""
    root = logging.getLogger()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if is_our_handler(h):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating double-stop from atexit or test resets."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
