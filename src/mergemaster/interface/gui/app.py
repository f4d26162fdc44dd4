from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Initializes the CustomTkinter environment, loads the persisted settings,
assembles the merge panel and log console, binds the controller and runs
the main loop. Settings are saved again when the window closes.
"""

import logging
import queue
from logging.handlers import QueueHandler

from mergemaster.domain import config as cfg
from mergemaster.domain import constants as const
from mergemaster.infra.logging import LoggingConfig, configure_logging, get_default_log_path
from mergemaster.interface.gui.components.logs_console import LogsFrame
from mergemaster.interface.gui.components.main_window import create_main_window
from mergemaster.interface.gui.components.merge_panel import MergePanel
from mergemaster.interface.gui.controllers.merge_controller import MergeController

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialize and launch the Graphical User Interface."""
    # -----------------------------------------------------------------------------
    # PHASE 1: DIAGNOSTIC INFRASTRUCTURE SETUP
    # -----------------------------------------------------------------------------
    configure_logging(LoggingConfig.for_gui(get_default_log_path()))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_VERSION}")

    gui_log_queue: queue.Queue = queue.Queue()
    gui_log_handler = QueueHandler(gui_log_queue)
    gui_log_handler.setLevel(logging.INFO)
    logging.getLogger().addHandler(gui_log_handler)

    # -----------------------------------------------------------------------------
    # PHASE 2: PERSISTENT STATE RECOVERY
    # -----------------------------------------------------------------------------
    config = cfg.load_config()

    # -----------------------------------------------------------------------------
    # PHASE 3: VIEW CONSTRUCTION AND CONTROLLER BINDING
    # -----------------------------------------------------------------------------
    app = create_main_window()

    panel = MergePanel(app, config)
    panel.grid(row=0, column=0, sticky="nsew", padx=15, pady=(15, 5))
    logs_frame = LogsFrame(app)
    logs_frame.grid(row=1, column=0, sticky="nsew", padx=15, pady=(5, 15))

    controller = MergeController(app, config)
    controller.register_view(panel)

    # -----------------------------------------------------------------------------
    # PHASE 4: LOG POLLING AND SHUTDOWN
    # -----------------------------------------------------------------------------
    log_formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", "%H:%M:%S")

    def poll_log_queue() -> None:
        """Flush queued records into the console widget."""
        while not gui_log_queue.empty():
            try:
                record = gui_log_queue.get_nowait()
            except queue.Empty:
                break
            logs_frame.append_log(log_formatter.format(record))
        app.after(100, poll_log_queue)

    def on_closing() -> None:
        """Persist session settings and terminate."""
        if controller.is_busy:
            controller.abort_merge()
        controller.sync_config_from_view()
        cfg.save_config(config)
        logging.getLogger().removeHandler(gui_log_handler)
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    app.after(100, poll_log_queue)

    app.mainloop()


if __name__ == "__main__":
    main()
