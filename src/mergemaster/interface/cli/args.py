from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict

from mergemaster.domain.constants import CURRENT_VERSION, DEFAULT_OUTPUT_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the MergeMaster CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="mergemaster",
        description=(
            "Combine selected files and directories into a single document "
            "with a directory tree summary and delimited file blocks."
        ),
    )

    # --- Selection ---
    p.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Files and/or directories to merge.",
    )
    p.add_argument(
        "-w", "--workspace",
        dest="workspace_root",
        default=None,
        help="Workspace root for relative paths and .gitignore (default: current directory).",
    )

    # --- Delivery ---
    sink = p.add_mutually_exclusive_group()
    sink.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help=f"Write the merged document to this file (default: <workspace>/{DEFAULT_OUTPUT_NAME}).",
    )
    sink.add_argument(
        "-c", "--clipboard",
        action="store_true",
        help="Copy the merged document to the system clipboard instead of writing a file.",
    )
    sink.add_argument(
        "--stdout",
        action="store_true",
        help="Print the merged document to standard output.",
    )

    # --- Filtering ---
    gitignore = p.add_mutually_exclusive_group()
    gitignore.add_argument(
        "--no-gitignore",
        dest="respect_gitignore",
        action="store_false",
        default=None,
        help="Merge files even if they match .gitignore rules.",
    )
    gitignore.add_argument(
        "--respect-gitignore",
        dest="respect_gitignore",
        action="store_true",
        default=None,
        help="Skip files matching the workspace .gitignore rules (default).",
    )

    # --- Runtime ---
    p.add_argument(
        "--min-selection",
        dest="min_selection",
        type=int,
        default=None,
        help="Reject selections with fewer entries than this.",
    )
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of parallel file readers.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings as the new defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the merge summary as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {CURRENT_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options the user did not pass map to None and are skipped at merge time.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    return {
        "workspace_root": args.workspace_root,
        "output_path": args.output_path,
        "respect_gitignore": args.respect_gitignore,
        "min_selection": args.min_selection,
        "max_workers": args.max_workers,
    }
