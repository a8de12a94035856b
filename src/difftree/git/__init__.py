"""Git interface layer — adapter, diff parsing, models."""

from difftree.git.adapter import (
    GitError,
    get_range_diff,
    get_repo_root,
    get_staged_diff,
    get_worktree_diff,
)
from difftree.git.diff_parser import DiffParser
from difftree.git.models import ChangeKind, ChangeRecord

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "DiffParser",
    "GitError",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
    "get_worktree_diff",
]
