"""Diff tree builder — FileStats to an ordered, aggregated forest.

Insertion works on mutable drafts keyed by segment name; finalisation
turns every draft into an immutable DirectoryNode whose children are
sorted (directories first, then by name) and whose counts are summed
bottom-up from its children.
"""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Dict, List, Literal, Sequence, Tuple, Union

from pyuca import Collator

from difftree.stats.models import FileStat, LineCounts
from difftree.tree.nodes import DirectoryNode, FileNode, TreeNode

logger = logging.getLogger(__name__)

Collation = Literal["uca", "casefold", "locale", "ordinal"]

COLLATIONS: Tuple[str, ...] = ("uca", "casefold", "locale", "ordinal")


@lru_cache(maxsize=None)
def _collator() -> Collator:
    # Loads the DUCET table once; construction is the expensive part
    return Collator()


def _uca_key(name: str) -> Tuple[Any, ...]:
    return (_collator().sort_key(name), name)


def _casefold_key(name: str) -> Tuple[Any, ...]:
    return (name.casefold(), name)


def _locale_key(name: str) -> Tuple[Any, ...]:
    return (locale.strxfrm(name), name)


def _ordinal_key(name: str) -> Tuple[Any, ...]:
    return (name,)


_NAME_KEYS: Dict[str, Callable[[str], Tuple[Any, ...]]] = {
    "uca": _uca_key,
    "casefold": _casefold_key,
    "locale": _locale_key,
    "ordinal": _ordinal_key,
}


def sort_key(node: TreeNode, collation: Collation = "uca") -> Tuple[int, Tuple[Any, ...]]:
    """Directories before files; then by name under *collation*.

    ``uca`` applies the Unicode Collation Algorithm (punctuation before
    digits before letters, lowercase before uppercase on ties), the same
    order a browser's ``localeCompare`` gives. The raw name breaks any
    remaining tie so the order is total.
    """
    kind = 0 if isinstance(node, DirectoryNode) else 1
    return kind, _NAME_KEYS[collation](node.name)


@dataclass
class _DirDraft:
    name: str
    path: str
    children: Dict[str, Union["_DirDraft", FileNode]] = field(default_factory=dict)


_Level = Dict[str, Union[_DirDraft, FileNode]]


def _split(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


def _promote(node: FileNode) -> _DirDraft:
    """Turn a file leaf into an empty directory draft at the same position.

    The file's own counts go with it; the directory aggregates its children only.
    """
    logger.debug("promoting file %s to directory", node.path)
    return _DirDraft(name=node.name, path=node.path)


def _insert(root: _Level, stat: FileStat) -> None:
    parts = _split(stat.path)
    if not parts:
        logger.debug("skipping stat %s with empty path", stat.id)
        return

    level = root
    current_path = ""
    for i, part in enumerate(parts):
        current_path = f"{current_path}/{part}" if current_path else part

        if i == len(parts) - 1:
            if part in level:
                logger.debug("duplicate position %s, keeping the later stat", current_path)
            level[part] = FileNode(
                name=part,
                path=current_path,
                id=stat.id,
                change=stat.change,
                add=stat.add,
                delete=stat.delete,
            )
            return

        existing = level.get(part)
        if existing is None:
            existing = level[part] = _DirDraft(name=part, path=current_path)
        elif isinstance(existing, FileNode):
            existing = level[part] = _promote(existing)
        level = existing.children


def _finalise(level: _Level, collation: Collation) -> List[TreeNode]:
    nodes: List[TreeNode] = []
    for entry in level.values():
        if isinstance(entry, FileNode):
            nodes.append(entry)
            continue
        children = _finalise(entry.children, collation)
        # A promoted file is no longer a leaf, so its counts are not included
        total = LineCounts()
        for child in children:
            total = total + child.counts
        nodes.append(
            DirectoryNode(
                name=entry.name,
                path=entry.path,
                children=tuple(children),
                add=total.add,
                delete=total.delete,
            )
        )
    nodes.sort(key=lambda node: sort_key(node, collation))
    return nodes


def build_diff_tree(
    stats: Sequence[FileStat],
    *,
    collation: Collation = "uca",
) -> List[TreeNode]:
    """Build the forest of root-level nodes for *stats*.

    Never raises for well-typed input: inconsistent paths (a file that is
    also an ancestor of another path) are resolved by promoting the file to
    a directory, and duplicate paths keep the last stat inserted.
    """
    if collation not in _NAME_KEYS:
        raise ValueError(f"Unknown collation: {collation!r}")

    root: _Level = {}
    for stat in stats:
        _insert(root, stat)
    return _finalise(root, collation)
