"""Tests for the stat extractor and the default line counter."""

import logging

import pytest

from difftree.git.models import ChangeKind, ChangeRecord
from difftree.stats.counting import count_lines
from difftree.stats.extractor import normalise_path, to_file_stats
from difftree.stats.models import FileStat, LineCounts


class TestCountLines:
    def test_identical(self):
        assert count_lines("a", "x\ny\n", "a", "x\ny\n") == LineCounts(0, 0)

    def test_added_file(self):
        assert count_lines("a", "", "a", "1\n2\n3\n") == LineCounts(3, 0)

    def test_deleted_file(self):
        assert count_lines("a", "1\n2\n", "a", "") == LineCounts(0, 2)

    def test_replacement_counts_both_sides(self):
        assert count_lines("a", "keep\nold\n", "a", "keep\nnew\nmore\n") == LineCounts(2, 1)


class TestIdentity:
    def test_new_path_wins(self):
        (stat,) = to_file_stats([ChangeRecord(old_path="a.txt", new_path="b.txt", change=ChangeKind.RENAMED)])
        assert stat.id == "b.txt"
        assert stat.path == "b.txt"
        assert stat.change == ChangeKind.RENAMED

    def test_old_path_fallback(self):
        (stat,) = to_file_stats([ChangeRecord(old_path="gone.txt", change=ChangeKind.DELETED)])
        assert stat.id == "gone.txt"

    def test_positional_fallback(self):
        records = [ChangeRecord(new_path=f"f{i}") for i in range(3)] + [ChangeRecord()]
        stats = to_file_stats(records)
        assert stats[3].id == "3"
        assert stats[3].path == "3"

    def test_empty_strings_count_as_absent(self):
        (stat,) = to_file_stats([ChangeRecord(old_path="", new_path="")])
        assert stat.id == "0"

    def test_leading_slashes_stripped_from_path_only(self):
        (stat,) = to_file_stats([ChangeRecord(new_path="//a/b.txt")])
        assert stat.id == "//a/b.txt"
        assert stat.path == "a/b.txt"

    def test_normalise_path(self):
        assert normalise_path("/a/b.txt") == normalise_path("a/b.txt") == "a/b.txt"


class TestExtraction:
    def test_order_preserved(self):
        records = [ChangeRecord(new_path=p) for p in ("z", "a", "m")]
        assert [s.path for s in to_file_stats(records)] == ["z", "a", "m"]

    def test_counts_from_contents(self):
        record = ChangeRecord(new_path="a.py", old_content="a\n", new_content="a\nb\n")
        (stat,) = to_file_stats([record])
        assert (stat.add, stat.delete) == (1, 0)

    def test_missing_content_is_empty(self):
        record = ChangeRecord(new_path="a.py", change=ChangeKind.ADDED, new_content="x\ny\n")
        (stat,) = to_file_stats([record])
        assert (stat.add, stat.delete) == (2, 0)

    def test_counter_arguments(self):
        seen = []

        def counter(old_name, old_content, new_name, new_content):
            seen.append((old_name, old_content, new_name, new_content))
            return LineCounts(1, 1)

        to_file_stats(
            [
                ChangeRecord(new_path="added.py", new_content="x\n"),
                ChangeRecord(old_path="gone.py"),
                ChangeRecord(),
            ],
            counter=counter,
        )
        assert seen == [
            ("added.py", "", "added.py", "x\n"),
            ("gone.py", "", "gone.py", ""),
            ("unknown", "", "unknown", ""),
        ]

    def test_failing_counter_degrades_to_zero(self, caplog):
        def counter(*args):
            raise RuntimeError("unsupported format")

        caplog.set_level(logging.DEBUG, logger="difftree.stats.extractor")
        records = [ChangeRecord(new_path="a.bin", old_content="x", new_content="y")]
        stats = to_file_stats(records, counter=counter)

        assert stats == [FileStat(id="a.bin", path="a.bin", change=ChangeKind.MODIFIED, add=0, delete=0)]
        assert "line count unavailable" in caplog.text

    def test_failure_only_affects_that_record(self):
        def counter(old_name, old_content, new_name, new_content):
            if new_name == "bad":
                raise ValueError("boom")
            return LineCounts(4, 2)

        stats = to_file_stats([ChangeRecord(new_path="good"), ChangeRecord(new_path="bad")], counter=counter)
        assert [(s.add, s.delete) for s in stats] == [(4, 2), (0, 0)]

    @pytest.mark.parametrize("result", [LineCounts(-1, 0), None, {"add": 1, "del": 1}])
    def test_invalid_counter_result_degrades_to_zero(self, result):
        (stat,) = to_file_stats([ChangeRecord(new_path="a")], counter=lambda *a: result)
        assert (stat.add, stat.delete) == (0, 0)

    def test_deterministic(self):
        records = [
            ChangeRecord(new_path="src/a.py", old_content="1\n2\n", new_content="1\n3\n"),
            ChangeRecord(old_path="b.py", change=ChangeKind.DELETED, old_content="x\n"),
        ]
        assert to_file_stats(records) == to_file_stats(records)

    def test_empty(self):
        assert to_file_stats([]) == []
