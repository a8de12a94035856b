"""Default line-count collaborator built on difflib."""

from __future__ import annotations

import difflib

from difftree.stats.models import LineCounts


def count_lines(
    old_name: str,
    old_content: str,
    new_name: str,
    new_content: str,
) -> LineCounts:
    """Count lines added and deleted going from *old_content* to *new_content*.

    The names are accepted for parity with diff libraries that pick a
    tokenizer from the file name; difflib compares plain lines.
    """
    if old_content == new_content:
        return LineCounts()

    old_lines = old_content.splitlines()
    new_lines = new_content.splitlines()
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    added = 0
    deleted = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "delete"):
            deleted += i2 - i1
        if tag in ("replace", "insert"):
            added += j2 - j1
    return LineCounts(add=added, delete=deleted)
