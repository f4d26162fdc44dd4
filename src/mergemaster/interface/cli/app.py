from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration layering
(defaults, persisted settings, command-line overrides), pre-flight checks,
the merge itself, delivery of the document, and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, TextIO

from mergemaster.core.pipeline.engine import merge
from mergemaster.core.pipeline.stages.validator import validate_config, validate_selection
from mergemaster.domain.config import get_default_config, load_config, save_config
from mergemaster.domain.merge_models import (
    MergeResult,
    OutputDestinationError,
    SelectionTooSmallError,
)
from mergemaster.infra.delivery import copy_to_clipboard, default_output_path, write_document
from mergemaster.infra.fs import resolve_workspace_root, to_path_refs
from mergemaster.infra.logging import LoggingConfig, configure_logging, get_logger
from mergemaster.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only)
    configure_logging(LoggingConfig.for_cli(debug=args.debug))
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration layering and validation
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(conf)

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight checks (no filesystem access before these pass)
    try:
        validate_selection(args.paths, conf["min_selection"])
    except SelectionTooSmallError as e:
        return _fail(str(e), EXIT_USAGE)

    workspace_root = resolve_workspace_root(conf["workspace_root"])
    if workspace_root is None:
        return _fail(
            f"No workspace folder: '{conf['workspace_root']}' is not a directory.", EXIT_USAGE
        )

    # 5. Merge
    selection, missing = to_path_refs(args.paths)
    for issue in missing:
        logger.warning(f"Selection entry skipped: {issue.path} ({issue.error})")

    try:
        result = merge(
            selection,
            respect_gitignore=conf["respect_gitignore"],
            workspace_root=workspace_root,
            min_selection=conf["min_selection"],
            max_workers=conf["max_workers"],
        )
    except KeyboardInterrupt:
        logger.warning("Merge interrupted by user.")
        print("Merge interrupted by user.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if not result.ok:
        return _fail(result.error, EXIT_FAILURE)

    # 6. Delivery
    try:
        destination = _deliver(result, conf, args)
    except OutputDestinationError as e:
        return _fail(str(e), EXIT_FAILURE)

    # 7. Report
    report_stream = sys.stderr if args.stdout else sys.stdout
    if args.json_output:
        payload = asdict(result)
        payload.pop("document", None)
        payload["destination"] = destination
        payload["unresolved"] = [asdict(i) for i in missing]
        print(json.dumps(payload, ensure_ascii=False, indent=2), file=report_stream)
    else:
        _print_human_summary(result, destination, report_stream)

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge the explicitly passed options over the base configuration.

    Args:
        base: Defaults or persisted configuration.
        overrides: Values from the command line (None means "not passed").

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# DELIVERY
# -----------------------------------------------------------------------------

def _deliver(result: MergeResult, conf: Dict[str, Any], args: Any) -> str:
    """
    Hand the document to the selected sink.

    Returns:
        str: Human-readable destination description.

    Raises:
        OutputDestinationError: If the sink is unavailable.
    """
    if args.clipboard:
        copy_to_clipboard(result.document)
        return "clipboard"

    if args.stdout:
        sys.stdout.write(result.document)
        sys.stdout.flush()
        return "stdout"

    output_path = conf["output_path"] or default_output_path(result.workspace_root)
    return write_document(os.path.expanduser(output_path), result.document)

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: MergeResult, destination: str, stream: TextIO) -> None:
    """Render the merge result as a short terminal report."""
    print("Merge completed successfully.", file=stream)
    print(f"Workspace: {result.workspace_root}", file=stream)
    print(f"Files merged: {len(result.files)}", file=stream)

    if destination == "clipboard":
        print("Merged content copied to clipboard.", file=stream)
    elif destination != "stdout":
        print(f"Merged files saved to: {destination}", file=stream)

    if result.issues:
        print(f"\nSkipped entries ({len(result.issues)}):", file=stream)
        for issue in result.issues:
            print(f"  - {issue.path}: {issue.error}", file=stream)


def _fail(message: str, code: int) -> int:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
