from __future__ import annotations

"""
Merge Panel UI Component.

Hosts the workspace selector, the list of selected files and folders, the
.gitignore toggle and the two merge actions (export to file, copy to
clipboard). Widgets are exposed as attributes so the controller can bind
commands and read state.
"""

import tkinter as tk
from typing import Any, Dict

import customtkinter as ctk


class MergePanel(ctk.CTkFrame):
    """Primary workspace of the MergeMaster window."""

    def __init__(self, master: Any, config: Dict[str, Any], **kwargs: Any):
        super().__init__(master, corner_radius=10, **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        # -----------------------------------------------------------------------------
        # WORKSPACE
        # -----------------------------------------------------------------------------
        ws_frame = ctk.CTkFrame(self, fg_color="transparent")
        ws_frame.grid(row=0, column=0, sticky="ew", padx=15, pady=(15, 5))
        ws_frame.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(ws_frame, text="Workspace:").grid(row=0, column=0, padx=(0, 10))
        self.entry_workspace = ctk.CTkEntry(ws_frame, placeholder_text="Current directory")
        self.entry_workspace.grid(row=0, column=1, sticky="ew")
        if config.get("workspace_root"):
            self.entry_workspace.insert(0, config["workspace_root"])
        self.btn_browse_workspace = ctk.CTkButton(ws_frame, text="Browse", width=90)
        self.btn_browse_workspace.grid(row=0, column=2, padx=(10, 0))

        # -----------------------------------------------------------------------------
        # SELECTION LIST
        # -----------------------------------------------------------------------------
        sel_bar = ctk.CTkFrame(self, fg_color="transparent")
        sel_bar.grid(row=1, column=0, sticky="ew", padx=15, pady=5)

        self.btn_add_files = ctk.CTkButton(sel_bar, text="Add Files", width=110)
        self.btn_add_files.pack(side="left", padx=(0, 8))
        self.btn_add_folder = ctk.CTkButton(sel_bar, text="Add Folder", width=110)
        self.btn_add_folder.pack(side="left", padx=(0, 8))
        self.btn_remove = ctk.CTkButton(sel_bar, text="Remove", width=90, fg_color="gray")
        self.btn_remove.pack(side="left", padx=(0, 8))
        self.btn_clear = ctk.CTkButton(sel_bar, text="Clear", width=90, fg_color="gray")
        self.btn_clear.pack(side="left")

        # CustomTkinter ships no listbox widget
        self.listbox = tk.Listbox(self, selectmode=tk.EXTENDED, activestyle="none", height=12)
        self.listbox.grid(row=2, column=0, sticky="nsew", padx=15, pady=5)

        # -----------------------------------------------------------------------------
        # OPTIONS AND ACTIONS
        # -----------------------------------------------------------------------------
        act_frame = ctk.CTkFrame(self, fg_color="transparent")
        act_frame.grid(row=3, column=0, sticky="ew", padx=15, pady=(5, 15))
        act_frame.grid_columnconfigure(1, weight=1)

        self.sw_gitignore = ctk.CTkSwitch(act_frame, text="Respect .gitignore")
        self.sw_gitignore.grid(row=0, column=0, sticky="w")
        if config.get("respect_gitignore", True):
            self.sw_gitignore.select()

        self.lbl_status = ctk.CTkLabel(act_frame, text="No items selected.", text_color="gray")
        self.lbl_status.grid(row=0, column=1, sticky="w", padx=15)

        self.btn_cancel = ctk.CTkButton(
            act_frame, text="Cancel", width=90, fg_color="#A83232", state="disabled"
        )
        self.btn_cancel.grid(row=0, column=2, padx=(0, 8))
        self.btn_copy = ctk.CTkButton(act_frame, text="Copy to Clipboard", width=150)
        self.btn_copy.grid(row=0, column=3, padx=(0, 8))
        self.btn_export = ctk.CTkButton(act_frame, text="Merge to File", width=150)
        self.btn_export.grid(row=0, column=4)
