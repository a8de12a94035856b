"""Stat extraction — per-file add/delete statistics."""

from difftree.stats.counting import count_lines
from difftree.stats.extractor import LineCounter, normalise_path, to_file_stats
from difftree.stats.models import FileStat, LineCounts

__all__ = [
    "FileStat",
    "LineCounter",
    "LineCounts",
    "count_lines",
    "normalise_path",
    "to_file_stats",
]
