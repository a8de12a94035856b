"""Diff tree — node types, builder, and expansion state."""

from difftree.tree.builder import COLLATIONS, Collation, build_diff_tree, sort_key
from difftree.tree.expansion import (
    EXPAND_POLICIES,
    ExpandPolicy,
    initial_expanded,
    merge_expanded,
    toggle,
    visible_rows,
)
from difftree.tree.nodes import (
    DirectoryNode,
    FileNode,
    TreeNode,
    directory_paths,
    find_node,
    iter_nodes,
    totals,
)

__all__ = [
    "COLLATIONS",
    "Collation",
    "DirectoryNode",
    "EXPAND_POLICIES",
    "ExpandPolicy",
    "FileNode",
    "TreeNode",
    "build_diff_tree",
    "directory_paths",
    "find_node",
    "initial_expanded",
    "iter_nodes",
    "merge_expanded",
    "sort_key",
    "toggle",
    "totals",
    "visible_rows",
]
