"""Expansion state — which directories a renderer shows open.

The state is a plain frozenset of directory paths owned by the caller;
nothing here is stored on the tree itself.
"""

from __future__ import annotations

from typing import AbstractSet, FrozenSet, Iterator, Literal, Optional, Sequence, Tuple

from difftree.tree.nodes import DirectoryNode, TreeNode, directory_paths

ExpandPolicy = Literal["all", "top", "none"]

EXPAND_POLICIES: Tuple[str, ...] = ("all", "top", "none")


def initial_expanded(
    forest: Sequence[TreeNode],
    policy: ExpandPolicy = "all",
) -> FrozenSet[str]:
    """Expansion state for a freshly displayed tree."""
    if policy == "all":
        return frozenset(directory_paths(forest))
    if policy == "top":
        return frozenset(n.path for n in forest if isinstance(n, DirectoryNode))
    if policy == "none":
        return frozenset()
    raise ValueError(f"Unknown expand policy: {policy!r}")


def merge_expanded(
    previous: AbstractSet[str],
    previous_forest: Optional[Sequence[TreeNode]],
    forest: Sequence[TreeNode],
) -> FrozenSet[str]:
    """Carry expansion state over to a rebuilt tree.

    Directories the user already saw keep their open/closed state,
    directories that appear for the first time open, and paths that
    vanished are dropped.
    """
    current = directory_paths(forest)
    known = directory_paths(previous_forest) if previous_forest is not None else set()
    new = current - known
    return frozenset((set(previous) & current) | new)


def toggle(expanded: AbstractSet[str], path: str) -> FrozenSet[str]:
    if path in expanded:
        return frozenset(expanded - {path})
    return frozenset(expanded | {path})


def visible_rows(
    forest: Sequence[TreeNode],
    expanded: AbstractSet[str],
    depth: int = 0,
) -> Iterator[Tuple[int, TreeNode]]:
    """Yield ``(depth, node)`` for each row shown; collapsed dirs hide children."""
    for node in forest:
        yield depth, node
        if isinstance(node, DirectoryNode) and node.path in expanded:
            yield from visible_rows(node.children, expanded, depth + 1)
