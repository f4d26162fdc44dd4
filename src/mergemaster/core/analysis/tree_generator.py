from __future__ import annotations

"""
Directory Tree Generator.

Builds the hierarchical name tree of the merged files from their relative
paths and hands it to the renderer. The tree exists only for the duration
of one render; nothing is shared between merges.
"""

import logging
from typing import Callable, Dict, Iterable, List

from mergemaster.core.analysis.tree_renderer import render_tree
from mergemaster.domain.tree_models import ROOT_ID, TreeArena, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(relative_paths: Iterable[str]) -> TreeArena:
    """
    Insert every relative path into an arena-backed trie.

    The last segment of each path is a file; every preceding segment is a
    directory. A node that gains children is a directory even if another
    path ended on it.

    Args:
        relative_paths: Forward-slash separated relative paths.

    Returns:
        TreeArena: Immutable tree, root at id 0.
    """
    names: List[str] = [""]
    children: List[Dict[str, int]] = [{}]

    for rel_path in sorted(set(relative_paths)):
        current = ROOT_ID
        for part in rel_path.split("/"):
            child_id = children[current].get(part)
            if child_id is None:
                child_id = len(names)
                names.append(part)
                children.append({})
                children[current][part] = child_id
            current = child_id

    nodes = tuple(
        TreeNode(
            name=names[i],
            children=tuple(children[i][name] for name in sorted(children[i])),
            is_leaf=(i != ROOT_ID and not children[i]),
        )
        for i in range(len(names))
    )
    return TreeArena(nodes=nodes)


def generate_tree_lines(file_set: Iterable[str], to_relative: Callable[[str], str]) -> List[str]:
    """
    Render the directory tree of a file set.

    Args:
        file_set: Absolute paths of the merged files.
        to_relative: Maps an absolute path to its RelativePath.

    Returns:
        List[str]: Tree lines (empty for an empty file set).
    """
    arena = build_tree(to_relative(path) for path in file_set)
    lines = render_tree(arena)
    logger.debug(f"Tree rendered: {arena.leaf_count()} file(s), {arena.directory_count()} dir(s).")
    return lines


def generate_tree(file_set: Iterable[str], to_relative: Callable[[str], str]) -> str:
    """Tree summary as text, every line newline-terminated."""
    return "".join(f"{line}\n" for line in generate_tree_lines(file_set, to_relative))
