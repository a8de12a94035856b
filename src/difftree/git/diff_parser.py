"""Unified diff parser — turns ``git diff`` output into ChangeRecords.

Each ``diff --git`` section becomes one ChangeRecord. Hunk bodies are
reassembled into an old side (context + removed lines) and a new side
(context + added lines) so the line counter sees the same changes the
patch describes. Handles BOM, CRLF, binary markers, renames, copies,
mode-only changes, /dev/null headers, C-quoted paths and hunk headers
without counts.
"""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass, field
from typing import Generator, List, Optional

from difftree.git.models import ChangeKind, ChangeRecord

# --- Regex patterns for diff parsing ---

# Paths with special or non-ASCII bytes are C-quoted by git (core.quotepath)
_QUOTED = r'"(?:[^"\\]|\\.)*"'

_DIFF_HEADER_RE = re.compile(
    rf"^diff --git (?P<old>{_QUOTED}|a/.*) (?P<new>{_QUOTED}|b/.*)$"
)
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)
_BINARY_RE = re.compile(r"^Binary files .* and .* differ$")
_GIT_BINARY_PATCH_RE = re.compile(r"^GIT binary patch$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_COPY_FROM_RE = re.compile(r"^copy from (.+)$")
_COPY_TO_RE = re.compile(r"^copy to (.+)$")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")
_FILE_HEADER_OLD = re.compile(r'^--- (?:("?a/.*)|/dev/null)$')
_FILE_HEADER_NEW = re.compile(r'^\+\+\+ (?:("?b/.*)|/dev/null)$')
_SIMILARITY_RE = re.compile(r"^(?:dis)?similarity index \d+%$")
_OLD_MODE_RE = re.compile(r"^old mode \d+$")
_NEW_MODE_RE = re.compile(r"^new mode \d+$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")
_INDEX_RE = re.compile(r"^index [0-9a-f]+\.\.[0-9a-f]+")


def _strip_bom(line: str) -> str:
    """Remove UTF-8 BOM if present."""
    return line.lstrip("\ufeff")


def _normalise(line: str) -> str:
    """Strip trailing CR (CRLF → LF) and a leading BOM."""
    return _strip_bom(line.rstrip("\r"))


def _unquote(token: str, prefix: str = "") -> str:
    """Decode a possibly C-quoted path and drop its ``a/``/``b/`` prefix.

    git escapes non-ASCII bytes as octal (``"caf\\303\\251.txt"``); the
    escapes are decoded to bytes first, then the bytes as UTF-8.
    """
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        raw = codecs.escape_decode(token[1:-1].encode("utf-8"))[0]
        token = raw.decode("utf-8", errors="replace")
    if prefix and token.startswith(prefix):
        token = token[len(prefix):]
    return token


def _join(lines: List[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


@dataclass
class _FileSection:
    """Mutable accumulator for one ``diff --git`` section."""

    old_path: Optional[str]
    new_path: Optional[str]
    is_new: bool = False
    is_deleted: bool = False
    is_rename: bool = False
    is_copy: bool = False
    mode_changed: bool = False
    is_binary: bool = False
    has_hunks: bool = False
    old_lines: List[str] = field(default_factory=list)
    new_lines: List[str] = field(default_factory=list)

    def kind(self) -> ChangeKind:
        if self.is_new:
            return ChangeKind.ADDED
        if self.is_deleted:
            return ChangeKind.DELETED
        if self.is_rename:
            return ChangeKind.RENAMED
        if self.is_copy:
            return ChangeKind.COPIED
        if self.mode_changed and not self.has_hunks and not self.is_binary:
            return ChangeKind.PERMISSION_CHANGE
        return ChangeKind.MODIFIED

    def to_record(self) -> ChangeRecord:
        kind = self.kind()
        old_path = None if kind == ChangeKind.ADDED else self.old_path
        new_path = None if kind == ChangeKind.DELETED else self.new_path

        if self.is_binary:
            # Content of binary files is not available from the patch
            return ChangeRecord(change=kind, old_path=old_path, new_path=new_path)
        return ChangeRecord(
            change=kind,
            old_path=old_path,
            new_path=new_path,
            old_content=_join(self.old_lines),
            new_content=_join(self.new_lines),
        )


class DiffParser:
    """Parse unified diff text into ChangeRecord objects.

    Usage::

        parser = DiffParser(diff_text)
        for record in parser.parse():
            ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = diff_text.splitlines()

    def records(self) -> List[ChangeRecord]:
        """Return every ChangeRecord of the diff, in diff order."""
        return list(self.parse())

    def parse(self) -> Generator[ChangeRecord, None, None]:
        """Yield one ChangeRecord per file section."""
        idx = 0
        total = len(self._lines)
        section: Optional[_FileSection] = None
        old_remaining = 0
        new_remaining = 0

        while idx < total:
            raw_line = self._lines[idx]

            # --- Hunk body: counts from the header say what is still content ---
            if section is not None and (old_remaining > 0 or new_remaining > 0):
                if _NO_NEWLINE_RE.match(raw_line):
                    idx += 1
                    continue
                if raw_line.startswith("+"):
                    section.new_lines.append(_normalise(raw_line[1:]))
                    new_remaining -= 1
                elif raw_line.startswith("-"):
                    section.old_lines.append(_normalise(raw_line[1:]))
                    old_remaining -= 1
                elif raw_line.startswith(" ") or raw_line == "":
                    # Some tools strip the leading space of empty context lines
                    content = _normalise(raw_line[1:])
                    section.old_lines.append(content)
                    section.new_lines.append(content)
                    old_remaining -= 1
                    new_remaining -= 1
                else:
                    # Truncated hunk — fall through and treat as a header line
                    old_remaining = new_remaining = 0
                    continue
                idx += 1
                continue

            # --- diff --git header → new file context ---
            m = _DIFF_HEADER_RE.match(raw_line)
            if m:
                if section is not None:
                    yield section.to_record()
                section = _FileSection(
                    old_path=_unquote(m.group("old"), "a/"),
                    new_path=_unquote(m.group("new"), "b/"),
                )
                idx += 1

                # Parse sub-headers (index, mode changes, renames, copies, new/deleted file)
                while idx < total:
                    sub = self._lines[idx]
                    if _INDEX_RE.match(sub) or _SIMILARITY_RE.match(sub):
                        idx += 1
                        continue
                    if _OLD_MODE_RE.match(sub) or _NEW_MODE_RE.match(sub):
                        section.mode_changed = True
                        idx += 1
                        continue
                    if _DELETED_FILE_RE.match(sub):
                        section.is_deleted = True
                        idx += 1
                        continue
                    if _NEW_FILE_RE.match(sub):
                        section.is_new = True
                        idx += 1
                        continue
                    if (rm := _RENAME_FROM_RE.match(sub)):
                        section.old_path = _unquote(rm.group(1))
                        section.is_rename = True
                        idx += 1
                        continue
                    if (rt := _RENAME_TO_RE.match(sub)):
                        section.new_path = _unquote(rt.group(1))
                        idx += 1
                        continue
                    if (cf := _COPY_FROM_RE.match(sub)):
                        section.old_path = _unquote(cf.group(1))
                        section.is_copy = True
                        idx += 1
                        continue
                    if (ct := _COPY_TO_RE.match(sub)):
                        section.new_path = _unquote(ct.group(1))
                        idx += 1
                        continue
                    if _BINARY_RE.match(sub) or _GIT_BINARY_PATCH_RE.match(sub):
                        section.is_binary = True
                        idx += 1
                        continue
                    break  # not a sub-header → stop
                continue

            if section is None:
                # Preamble before the first file (e.g. commit message) — skip
                idx += 1
                continue

            # --- File headers (--- a/ and +++ b/) ---
            if (fo := _FILE_HEADER_OLD.match(raw_line)):
                if fo.group(1) is None:
                    section.is_new = True
                idx += 1
                continue
            if (fn := _FILE_HEADER_NEW.match(raw_line)):
                if fn.group(1) is None:
                    section.is_deleted = True
                idx += 1
                continue

            # --- Hunk header ---
            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                section.has_hunks = True
                old_remaining = int(hm.group(2)) if hm.group(2) is not None else 1
                new_remaining = int(hm.group(4)) if hm.group(4) is not None else 1
                idx += 1
                continue

            # Anything else outside a hunk (binary patch payload, trailers) — skip
            idx += 1

        if section is not None:
            yield section.to_record()
