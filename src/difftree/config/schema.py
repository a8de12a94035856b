"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_counts: bool = True


@dataclass
class TreeConfig:
    collation: Literal["uca", "casefold", "locale", "ordinal"] = "uca"
    expand: Literal["all", "top", "none"] = "all"  # directories open on first display


@dataclass
class IgnoreConfig:
    paths: List[str] = field(default_factory=list)  # fnmatch globs


@dataclass
class DiffTreeConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
