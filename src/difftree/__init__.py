"""difftree — turn per-file change records into an aggregated directory tree."""

from difftree.git.models import ChangeKind, ChangeRecord
from difftree.stats import FileStat, LineCounts, count_lines, to_file_stats
from difftree.tree import DirectoryNode, FileNode, TreeNode, build_diff_tree

__version__ = "0.1.0"

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "DirectoryNode",
    "FileNode",
    "FileStat",
    "LineCounts",
    "TreeNode",
    "__version__",
    "build_diff_tree",
    "count_lines",
    "to_file_stats",
]
