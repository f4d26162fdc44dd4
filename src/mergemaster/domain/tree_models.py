from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides an arena representation of the merged file hierarchy: every node
is an immutable record addressed by an integer id, children are referenced
by id and kept sorted by name. The root (id 0) is unnamed.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

ROOT_ID = 0

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeNode:
    """
    A single entry in the directory tree.

    Attributes:
        name: Path segment of this node (empty for the root).
        children: Ids of child nodes, sorted by child name.
        is_leaf: True for files, False for directories and the root.
    """
    name: str
    children: Tuple[int, ...] = ()
    is_leaf: bool = False

    @property
    def is_directory(self) -> bool:
        return not self.is_leaf


@dataclass(frozen=True)
class TreeArena:
    """
    Immutable collection of TreeNodes indexed by id.

    Attributes:
        nodes: All nodes, root first.
    """
    nodes: Tuple[TreeNode, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, node_id: int) -> TreeNode:
        return self.nodes[node_id]

    @property
    def root(self) -> TreeNode:
        return self.nodes[ROOT_ID]

    def iter_descendants(self, node_id: int = ROOT_ID) -> Iterator[TreeNode]:
        """Yield every node below ``node_id`` in depth-first, sorted order."""
        for child_id in self.nodes[node_id].children:
            yield self.nodes[child_id]
            yield from self.iter_descendants(child_id)

    def leaf_count(self) -> int:
        return sum(1 for node in self.iter_descendants() if node.is_leaf)

    def directory_count(self) -> int:
        return sum(1 for node in self.iter_descendants() if node.is_directory)
