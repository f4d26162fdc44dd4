from __future__ import annotations

"""
Ignore-Rule Filtering Component.

Builds the inclusion predicate applied to every candidate file before it
enters the merge set. Rules come from the workspace's .gitignore and are
matched with pathspec's gitignore semantics (globs, directory markers,
negation, last matching rule wins). Ignore filtering is a convenience:
every failure path degrades to accepting all files.
"""

import logging
import os
from typing import Callable, List, Optional

import pathspec

from mergemaster.domain.constants import IGNORE_FILE_NAME

logger = logging.getLogger(__name__)

IncludePredicate = Callable[[str], bool]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def accept_all(_path: str) -> bool:
    return True


def load_ignore_rules(root_dir: str) -> Optional[pathspec.PathSpec]:
    """
    Parse the ignore file at the workspace root into a rule set.

    Args:
        root_dir: Workspace root holding the ignore file.

    Returns:
        Optional[pathspec.PathSpec]: Compiled rules, or None when there is
        nothing usable (missing, unreadable or malformed file).
    """
    ignore_path = os.path.join(root_dir, IGNORE_FILE_NAME)

    try:
        with open(ignore_path, "r", encoding="utf-8") as f:
            lines: List[str] = f.read().splitlines()
    except FileNotFoundError:
        logger.debug(f"{IGNORE_FILE_NAME} not found in {root_dir}, proceeding without ignore rules.")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {ignore_path}: {e}. Ignore rules disabled.")
        return None

    try:
        spec = pathspec.GitIgnoreSpec.from_lines(lines)
    except ValueError as e:
        logger.warning(f"Malformed rule in {ignore_path}: {e}. Ignore rules disabled.")
        return None

    logger.debug(f"Loaded {len(spec.patterns)} ignore rules from {ignore_path}")
    return spec


def build_ignore_filter(root_dir: str, enabled: bool = True) -> IncludePredicate:
    """
    Create the inclusion predicate for one merge operation.

    Rules are read fresh on every call since the ignore file may change
    between merges.

    Args:
        root_dir: Workspace root; candidates are matched relative to it.
        enabled: When False, every path is accepted.

    Returns:
        IncludePredicate: Function returning True if an absolute path should be merged.
    """
    if not enabled:
        return accept_all

    try:
        spec = load_ignore_rules(root_dir)
        if spec is None:
            return accept_all

        root_abs = os.path.abspath(root_dir)

        def include(path: str) -> bool:
            rel = _relative_to(path, root_abs)
            if rel is None:
                return True
            return not spec.match_file(rel)

        return include

    except Exception as e:
        logger.error(f"Error creating ignore filter for {root_dir}: {e}")
        return accept_all

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _relative_to(path: str, root_abs: str) -> Optional[str]:
    """Forward-slash path relative to the root; None when outside it."""
    try:
        rel = os.path.relpath(os.path.abspath(path), root_abs)
    except ValueError:
        return None

    rel = rel.replace(os.sep, "/")
    if rel == ".." or rel.startswith("../") or rel == ".":
        return None
    return rel
