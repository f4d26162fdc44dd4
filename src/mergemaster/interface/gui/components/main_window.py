from __future__ import annotations

"""
Main Application Window Factory.

Initializes the root CustomTkinter window and its two-row grid: the merge
panel on top and the log console below.
"""

import customtkinter as ctk

from mergemaster.domain import constants as const


def create_main_window() -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Returns:
        ctk.CTk: The configured root application instance.
    """
    ctk.set_appearance_mode("System")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title(f"{const.APP_NAME} - v{const.CURRENT_VERSION}")
    app.geometry("860x640")

    # Row 0 (merge panel) takes the spare height, row 1 (logs) stays compact
    app.grid_columnconfigure(0, weight=1)
    app.grid_rowconfigure(0, weight=3)
    app.grid_rowconfigure(1, weight=1)

    return app
