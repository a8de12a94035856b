"""Rich terminal reporter — folder tree with change markers and counts."""

from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from difftree.git.models import ChangeKind
from difftree.tree.nodes import DirectoryNode, FileNode, TreeNode

_CHANGE_STYLE = {
    ChangeKind.ADDED: "green",
    ChangeKind.DELETED: "red",
    ChangeKind.MODIFIED: "yellow",
    ChangeKind.RENAMED: "cyan",
    ChangeKind.COPIED: "cyan",
    ChangeKind.PERMISSION_CHANGE: "magenta",
}

_CHANGE_MARKER = {
    ChangeKind.ADDED: "A",
    ChangeKind.DELETED: "D",
    ChangeKind.MODIFIED: "M",
    ChangeKind.RENAMED: "R",
    ChangeKind.COPIED: "C",
    ChangeKind.PERMISSION_CHANGE: "P",
}


def _counts(node: TreeNode) -> Text:
    text = Text("  ")
    text.append(f"+{node.add}", style="green")
    text.append(" ")
    text.append(f"-{node.delete}", style="red")
    return text


def _directory_label(node: DirectoryNode, is_open: bool, show_counts: bool) -> Text:
    icon = "📂" if is_open else "📁"
    label = Text(f"{icon} ")
    label.append(node.name, style="bold")
    if not is_open:
        label.append(" …", style="dim")
    if show_counts:
        label.append_text(_counts(node))
    return label


def _file_label(node: FileNode, show_counts: bool) -> Text:
    style = _CHANGE_STYLE.get(node.change, "")
    label = Text(f"{_CHANGE_MARKER.get(node.change, '?')} ", style=f"bold {style}")
    label.append(node.name)
    if show_counts:
        label.append_text(_counts(node))
    return label


def _attach(
    parent: Tree,
    nodes: Sequence[TreeNode],
    expanded: AbstractSet[str],
    show_counts: bool,
) -> None:
    for node in nodes:
        if isinstance(node, DirectoryNode):
            is_open = node.path in expanded
            branch = parent.add(_directory_label(node, is_open, show_counts))
            if is_open:
                _attach(branch, node.children, expanded, show_counts)
        else:
            parent.add(_file_label(node, show_counts))


def build_tree(
    forest: Sequence[TreeNode],
    file_count: int,
    expanded: AbstractSet[str],
    *,
    show_counts: bool = True,
) -> Tree:
    """Build the rich renderable for *forest*."""
    title = "File Changed" if file_count == 1 else "Files Changed"
    root = Tree(Text.assemble((title, "bold"), (f" ({file_count})", "dim")), guide_style="dim")
    _attach(root, forest, expanded, show_counts)
    return root


def render(
    forest: Sequence[TreeNode],
    file_count: int,
    expanded: AbstractSet[str],
    *,
    show_counts: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the diff tree to the terminal using Rich."""
    console = console or Console()

    if not forest:
        console.print("[dim]No changes.[/dim]")
        return

    console.print(build_tree(forest, file_count, expanded, show_counts=show_counts))
