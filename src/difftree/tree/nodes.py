"""Tree node variants — directories and files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Set, Tuple, Union

from difftree.git.models import ChangeKind
from difftree.stats.models import LineCounts


@dataclass(frozen=True)
class FileNode:
    """A changed file; ``id`` is the anchor passed to selection callbacks."""

    name: str
    path: str
    id: str
    change: ChangeKind
    add: int = 0
    delete: int = 0

    kind = "file"

    @property
    def counts(self) -> LineCounts:
        return LineCounts(self.add, self.delete)


@dataclass(frozen=True)
class DirectoryNode:
    """A path prefix shared by one or more files, with aggregated counts."""

    name: str
    path: str
    children: Tuple["TreeNode", ...] = ()
    add: int = 0
    delete: int = 0

    kind = "dir"

    @property
    def counts(self) -> LineCounts:
        return LineCounts(self.add, self.delete)


TreeNode = Union[DirectoryNode, FileNode]


def iter_nodes(forest: Sequence[TreeNode], depth: int = 0) -> Iterator[Tuple[int, TreeNode]]:
    """Depth-first pre-order walk yielding ``(depth, node)``."""
    for node in forest:
        yield depth, node
        if isinstance(node, DirectoryNode):
            yield from iter_nodes(node.children, depth + 1)


def directory_paths(forest: Sequence[TreeNode]) -> Set[str]:
    return {node.path for _, node in iter_nodes(forest) if isinstance(node, DirectoryNode)}


def find_node(forest: Sequence[TreeNode], path: str) -> Optional[TreeNode]:
    """Return the node at *path* (``/``-separated), or None."""
    parts = [p for p in path.split("/") if p]
    level: Sequence[TreeNode] = forest
    found: Optional[TreeNode] = None
    for part in parts:
        found = next((n for n in level if n.name == part), None)
        if found is None:
            return None
        level = found.children if isinstance(found, DirectoryNode) else ()
    return found


def totals(forest: Sequence[TreeNode]) -> LineCounts:
    """Sum of the root aggregates — the size of the whole change set."""
    total = LineCounts()
    for node in forest:
        total = total + node.counts
    return total
