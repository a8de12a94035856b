"""Data models for change records produced by a diff source."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeKind(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    COPIED = "copied"
    PERMISSION_CHANGE = "permission_change"


@dataclass(frozen=True)
class ChangeRecord:
    """One logical file change as reported by a diff source.

    Added files carry only ``new_path``, deleted files only ``old_path``;
    modified, renamed and copied files may carry both.
    """

    change: ChangeKind = ChangeKind.MODIFIED
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    old_content: Optional[str] = None
    new_content: Optional[str] = None

    @property
    def display_path(self) -> Optional[str]:
        return self.new_path or self.old_path
