"""Per-file statistic models."""

from __future__ import annotations

from dataclasses import dataclass

from difftree.git.models import ChangeKind


@dataclass(frozen=True)
class LineCounts:
    """Added and deleted line counts for one file (or an aggregate)."""

    add: int = 0
    delete: int = 0

    def __add__(self, other: "LineCounts") -> "LineCounts":
        return LineCounts(self.add + other.add, self.delete + other.delete)


ZERO = LineCounts()


@dataclass(frozen=True)
class FileStat:
    """Normalised statistic for one change record.

    ``id`` is the anchor identity used by consumers to select a file; it is
    stable for a given input but not guaranteed unique.
    """

    id: str
    path: str
    change: ChangeKind
    add: int = 0
    delete: int = 0

    @property
    def counts(self) -> LineCounts:
        return LineCounts(self.add, self.delete)
