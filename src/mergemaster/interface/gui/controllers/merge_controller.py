from __future__ import annotations

"""
Merge Workflow Controller.

Owns the GUI session state (selection list and configuration), runs merges
in a background thread and delivers the finished document to the sink the
user picked: a file chosen through a save dialog, or the clipboard.
"""

import logging
import os
import threading
import tkinter.messagebox as mb
from tkinter import filedialog
from typing import Any, Dict, Iterable, List, Optional

from mergemaster.core.pipeline.stages.validator import validate_selection
from mergemaster.domain import constants as const
from mergemaster.domain.merge_models import (
    MergeResult,
    OutputDestinationError,
    SelectionTooSmallError,
)
from mergemaster.infra.delivery import copy_to_clipboard, write_document
from mergemaster.infra.fs import resolve_workspace_root
from mergemaster.interface.gui import threads

logger = logging.getLogger(__name__)

ACTION_EXPORT = "export"
ACTION_COPY = "copy"


class MergeController:
    """
    Mediates between the MergePanel widgets and the merge engine.
    """

    def __init__(self, app: Any, config: Dict[str, Any]):
        self.app = app
        self.config = config
        self.view: Any = None
        self.selection: List[str] = []

        self._cancellation_event = threading.Event()
        self._pending_action: Optional[str] = None
        self._pending_output: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self._pending_action is not None

    def register_view(self, view: Any) -> None:
        """Attach the panel and bind its commands."""
        self.view = view
        view.btn_browse_workspace.configure(command=self.browse_workspace)
        view.btn_add_files.configure(command=self.add_files)
        view.btn_add_folder.configure(command=self.add_folder)
        view.btn_remove.configure(command=self.remove_selected)
        view.btn_clear.configure(command=self.clear_selection)
        view.btn_export.configure(command=self.export_merge)
        view.btn_copy.configure(command=self.copy_merge)
        view.btn_cancel.configure(command=self.abort_merge)

    # -----------------------------------------------------------------------------
    # STATE SYNCHRONIZATION
    # -----------------------------------------------------------------------------

    def sync_config_from_view(self) -> None:
        """Scrape widget values into the session configuration."""
        if not self.view:
            return
        self.config["workspace_root"] = self.view.entry_workspace.get().strip()
        self.config["respect_gitignore"] = bool(self.view.sw_gitignore.get())

    def _refresh_selection_view(self) -> None:
        if not self.view:
            return
        self.view.listbox.delete(0, "end")
        for path in self.selection:
            self.view.listbox.insert("end", path)
        count = len(self.selection)
        status = "No items selected." if count == 0 else f"{count} item(s) selected."
        self.view.lbl_status.configure(text=status)

    # -----------------------------------------------------------------------------
    # SELECTION MANAGEMENT
    # -----------------------------------------------------------------------------

    def add_paths(self, paths: Iterable[str]) -> int:
        """
        Append paths to the selection, ignoring ones already present.

        Returns:
            int: Number of paths actually added.
        """
        added = 0
        for raw in paths:
            if not raw:
                continue
            path = os.path.abspath(raw)
            if path not in self.selection:
                self.selection.append(path)
                added += 1
        self._refresh_selection_view()
        return added

    def add_files(self) -> None:
        paths = filedialog.askopenfilenames(
            parent=self.app, title="Select Files", initialdir=self._initial_dir()
        )
        self.add_paths(paths or [])

    def add_folder(self) -> None:
        path = filedialog.askdirectory(
            parent=self.app, title="Select Folder", initialdir=self._initial_dir()
        )
        if path:
            self.add_paths([path])

    def remove_selected(self) -> None:
        indices = set(self.view.listbox.curselection()) if self.view else set()
        if not indices:
            return
        self.selection = [p for i, p in enumerate(self.selection) if i not in indices]
        self._refresh_selection_view()

    def clear_selection(self) -> None:
        self.selection = []
        self._refresh_selection_view()

    def browse_workspace(self) -> None:
        path = filedialog.askdirectory(parent=self.app, title="Select Workspace Folder")
        if path and self.view:
            self.view.entry_workspace.delete(0, "end")
            self.view.entry_workspace.insert(0, path)
            self.config["workspace_root"] = path

    # -----------------------------------------------------------------------------
    # MERGE LIFECYCLE
    # -----------------------------------------------------------------------------

    def export_merge(self) -> None:
        """Ask for a destination, then merge the selection into that file."""
        root = self._preflight()
        if root is None:
            return

        output = filedialog.asksaveasfilename(
            parent=self.app,
            title="Save Merged Output",
            initialdir=root,
            initialfile=const.DEFAULT_OUTPUT_NAME,
            defaultextension=".txt",
            filetypes=[("Text Files", "*.txt"), ("All Files", "*.*")],
        )
        if not output:
            logger.info("Export cancelled: no destination chosen.")
            return
        self._start_merge(ACTION_EXPORT, output)

    def copy_merge(self) -> None:
        """Merge the selection and place the document on the clipboard."""
        if self._preflight() is None:
            return
        self._start_merge(ACTION_COPY, None)

    def abort_merge(self) -> None:
        """Signal the background merge to stop."""
        if not self._cancellation_event.is_set():
            logger.info("User requested merge cancellation. Signaling workers...")
            self._cancellation_event.set()
            if self.view:
                self.view.btn_cancel.configure(text="Canceling...", state="disabled")

    def handle_thread_callback(self, result: Any) -> None:
        """Marshal the worker's outcome onto the Tk main thread."""
        self.app.after(0, lambda: self.process_result(result))

    def process_result(self, result: Any) -> None:
        """Deliver a finished merge or report why it failed."""
        action, output = self._pending_action, self._pending_output
        self._pending_action = None
        self._pending_output = None
        self.set_ui_state(busy=False)

        if isinstance(result, Exception):
            mb.showerror("Merge Failed", f"Unexpected error: {result}\n\nSee logs for details.")
            return

        if not isinstance(result, MergeResult):
            return

        if not result.ok:
            if self._cancellation_event.is_set() and "cancelled" in (result.error or "").lower():
                logger.info("Merge stopped by user signal.")
            else:
                mb.showerror("Merge Failed", result.error)
            return

        if self._cancellation_event.is_set():
            logger.info("Merge finished after cancellation; output discarded.")
            return

        try:
            if action == ACTION_EXPORT:
                target = write_document(output or "", result.document)
                message = f"Merged files saved to: {target}"
            else:
                copy_to_clipboard(result.document)
                message = "Merged content copied to clipboard."
        except OutputDestinationError as e:
            mb.showerror("Output Error", str(e))
            return

        if result.issues:
            skipped = "\n".join(f"- {i.path}: {i.error}" for i in result.issues[:10])
            more = len(result.issues) - 10
            if more > 0:
                skipped += f"\n... and {more} more"
            mb.showwarning("Merge Completed With Issues", f"{message}\n\nSkipped entries:\n{skipped}")
        else:
            mb.showinfo("Merge Completed", message)

    def set_ui_state(self, busy: bool) -> None:
        """Toggle the action buttons while a merge is running."""
        if not self.view:
            return
        state = "disabled" if busy else "normal"
        for btn in (self.view.btn_export, self.view.btn_copy, self.view.btn_add_files,
                    self.view.btn_add_folder, self.view.btn_remove, self.view.btn_clear):
            btn.configure(state=state)
        self.view.btn_cancel.configure(text="Cancel", state="normal" if busy else "disabled")

    # -----------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -----------------------------------------------------------------------------

    def _preflight(self) -> Optional[str]:
        """Check the selection size and workspace before any file is touched."""
        self.sync_config_from_view()
        try:
            validate_selection(self.selection, self.config.get("min_selection", 1))
        except SelectionTooSmallError as e:
            mb.showwarning("Nothing To Merge", str(e))
            return None

        root = resolve_workspace_root(self.config.get("workspace_root"))
        if root is None:
            mb.showerror(
                "No Workspace",
                f"The workspace folder '{self.config.get('workspace_root')}' does not exist.",
            )
        return root

    def _start_merge(self, action: str, output: Optional[str]) -> None:
        self._pending_action = action
        self._pending_output = output
        self._cancellation_event.clear()
        self.set_ui_state(busy=True)
        logger.debug(f"Starting merge ({action}) of {len(self.selection)} item(s).")

        threading.Thread(
            target=threads.run_merge_task,
            args=(
                list(self.selection),
                dict(self.config),
                self.handle_thread_callback,
                self._cancellation_event,
            ),
            daemon=True,
        ).start()

    def _initial_dir(self) -> str:
        return resolve_workspace_root(self.config.get("workspace_root")) or os.getcwd()
