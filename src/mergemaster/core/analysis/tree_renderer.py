from __future__ import annotations

"""
Tree Renderer.

Converts a TreeArena into ASCII-art lines using the standard connectors
(├──, └──). Directories carry a trailing slash.
"""

from typing import List

from mergemaster.domain.constants import (
    BRANCH,
    DIR_SUFFIX,
    LAST_BRANCH,
    PIPE_PREFIX,
    SPACE_PREFIX,
)
from mergemaster.domain.tree_models import TreeArena, TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(arena: TreeArena) -> List[str]:
    """
    Render the whole tree.

    Each child of the unnamed root becomes a top-level line (its own name)
    followed by its subtree at zero indent. With a single common root this
    yields one top line; disjoint roots are listed one after the other.

    Args:
        arena: Tree to render.

    Returns:
        List[str]: Visual lines, without trailing newlines.
    """
    lines: List[str] = []
    for top_id in arena.root.children:
        top = arena[top_id]
        lines.append(_label(top))
        render_subtree(arena, top_id, lines, prefix="")
    return lines


def render_subtree(arena: TreeArena, node_id: int, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the children of ``node_id`` to ``lines``.

    Args:
        arena: Tree being rendered.
        node_id: Node whose children are rendered.
        lines: Accumulator for output strings.
        prefix: Continuation glyphs inherited from the ancestors.
    """
    child_ids = arena[node_id].children
    total = len(child_ids)

    for i, child_id in enumerate(child_ids):
        is_last = (i == total - 1)
        connector = LAST_BRANCH if is_last else BRANCH
        child = arena[child_id]

        lines.append(f"{prefix}{connector}{_label(child)}")
        if child.is_directory:
            render_subtree(arena, child_id, lines, prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _label(node: TreeNode) -> str:
    return f"{node.name}{DIR_SUFFIX}" if node.is_directory else node.name
