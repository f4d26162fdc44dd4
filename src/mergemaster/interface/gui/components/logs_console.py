from __future__ import annotations

"""
Diagnostics Console.

Read-only text area showing the session's log records, fed from a queue
polled by the application loop.
"""

from typing import Any

import customtkinter as ctk


class LogsFrame(ctk.CTkFrame):
    """Monospaced log buffer with a copy-to-clipboard action."""

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.textbox = ctk.CTkTextbox(self, state="disabled", font=("Consolas", 10), height=120)
        self.textbox.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 0))

        self.btn_copy = ctk.CTkButton(self, text="Copy Logs", width=110, command=self._copy_logs)
        self.btn_copy.grid(row=1, column=0, padx=10, pady=10, sticky="e")

    def append_log(self, msg: str) -> None:
        """
        Append a formatted record, keeping the buffer read-only for the user.

        Args:
            msg: Formatted log message string.
        """
        self.textbox.configure(state="normal")
        self.textbox.insert("end", msg + "\n")
        self.textbox.see("end")
        self.textbox.configure(state="disabled")

    def _copy_logs(self) -> None:
        self.clipboard_clear()
        self.clipboard_append(self.textbox.get("1.0", "end"))
