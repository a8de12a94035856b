"""JSON reporter — the forest as a machine-readable document."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from difftree.stats.models import FileStat
from difftree.tree.nodes import DirectoryNode, TreeNode, totals


def node_to_dict(node: TreeNode) -> Dict[str, Any]:
    """Serialise one node (recursively for directories)."""
    if isinstance(node, DirectoryNode):
        return {
            "type": "dir",
            "name": node.name,
            "path": node.path,
            "add": node.add,
            "del": node.delete,
            "children": [node_to_dict(child) for child in node.children],
        }
    return {
        "type": "file",
        "name": node.name,
        "path": node.path,
        "id": node.id,
        "change": node.change.value,
        "add": node.add,
        "del": node.delete,
    }


def to_dict(forest: Sequence[TreeNode], stats: Sequence[FileStat]) -> Dict[str, Any]:
    """Convert a forest to a JSON-serialisable dict."""
    tree: List[Dict[str, Any]] = [node_to_dict(node) for node in forest]
    total = totals(forest)
    return {
        "version": "1.0",
        "files": len(stats),
        "add": total.add,
        "del": total.delete,
        "tree": tree,
    }


def render(forest: Sequence[TreeNode], stats: Sequence[FileStat]) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(forest, stats), indent=2)
