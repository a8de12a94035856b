"""Stat extractor — ChangeRecords to FileStats.

Line counting is delegated to a collaborator that may fail; failures are
absorbed here and degrade to zero counts so a single unreadable file never
breaks the whole tree.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from difftree.git.models import ChangeRecord
from difftree.stats.counting import count_lines
from difftree.stats.models import ZERO, FileStat, LineCounts

logger = logging.getLogger(__name__)

LineCounter = Callable[[str, str, str, str], LineCounts]


def _record_identity(record: ChangeRecord, index: int) -> str:
    return record.new_path or record.old_path or str(index)


def normalise_path(path: str) -> str:
    """Strip leading slashes so ``/a/b`` and ``a/b`` land on the same node."""
    return path.lstrip("/")


def _safe_counts(record: ChangeRecord, counter: LineCounter) -> LineCounts:
    old_name = record.old_path or record.new_path or "unknown"
    new_name = record.new_path or record.old_path or "unknown"
    try:
        counts = counter(
            old_name,
            record.old_content or "",
            new_name,
            record.new_content or "",
        )
    except Exception as exc:
        logger.debug("line count unavailable for %s: %s", new_name, exc)
        return ZERO

    if (
        not isinstance(counts, LineCounts)
        or not isinstance(counts.add, int)
        or not isinstance(counts.delete, int)
        or counts.add < 0
        or counts.delete < 0
    ):
        logger.debug("line count unavailable for %s: invalid result %r", new_name, counts)
        return ZERO
    return counts


def to_file_stats(
    records: Sequence[ChangeRecord],
    counter: Optional[LineCounter] = None,
) -> List[FileStat]:
    """Map each record to a FileStat, preserving order (one per record)."""
    counter = counter or count_lines
    stats: List[FileStat] = []
    for index, record in enumerate(records):
        identity = _record_identity(record, index)
        counts = _safe_counts(record, counter)
        stats.append(
            FileStat(
                id=identity,
                path=normalise_path(identity),
                change=record.change,
                add=counts.add,
                delete=counts.delete,
            )
        )
    return stats
