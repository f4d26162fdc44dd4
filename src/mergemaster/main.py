from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI when arguments are given and to the GUI
otherwise, and installs a global exception hook so fatal crashes are
logged and reported on the active interface.
"""

import logging
import os
import sys
import traceback
from typing import Any

# -----------------------------------------------------------------------------
# ENVIRONMENT INITIALIZATION
# -----------------------------------------------------------------------------

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, "frozen", False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)


# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type, value: BaseException, tb: Any) -> None:
    """
    Trap unhandled exceptions and report them on the active interface.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    error_msg = str(value)

    logger = logging.getLogger("mergemaster.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {error_msg}\n{stack_trace}")

    if len(sys.argv) > 1:
        print("\n" + "=" * 80, file=sys.stderr)
        print("CRITICAL ERROR (MERGEMASTER CLI)", file=sys.stderr)
        print("=" * 80, file=sys.stderr)
        print(stack_trace, file=sys.stderr)
    else:
        try:
            import tkinter.messagebox as mb
            from tkinter import Tk
            root = Tk()
            root.withdraw()
            mb.showerror(
                "MergeMaster - Fatal Error",
                f"A critical error occurred in the interface:\n\n{error_msg}\n\n"
                f"Technical details have been saved to the log file."
            )
            root.destroy()
        except Exception:
            print(f"CRITICAL SYSTEM ERROR: {error_msg}\n{stack_trace}", file=sys.stderr)


sys.excepthook = global_exception_handler


# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Delegate to the CLI (arguments present) or the GUI.

    Returns:
        int: Process exit code.
    """
    try:
        if len(sys.argv) > 1:
            from mergemaster.interface.cli.app import main as cli_main
            return cli_main()

        from mergemaster.interface.gui.app import main as gui_main
        gui_main()
        return 0

    except Exception as e:
        global_exception_handler(type(e), e, sys.exc_info()[2])
        return 1


if __name__ == "__main__":
    sys.exit(main())
