"""Tests for atomic write utilities."""

from pathlib import Path

from pcgscore.common.persistence import write_files_atomic, write_text_atomic


class TestWriteTextAtomic:
    """Tests for write_text_atomic function."""

    def test_creates_parent_and_file(self, tmp_path: Path) -> None:
        path = tmp_path / "result" / "constants.json"

        write_text_atomic(path, '{"a": 1}')

        assert path.read_text() == '{"a": 1}'

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.csv"
        path.write_text("old")

        write_text_atomic(path, "new")

        assert path.read_text() == "new"

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        write_text_atomic(tmp_path / "scores.csv", "a,b\n")

        assert not list(tmp_path.glob(".scores.csv.*.tmp"))

    def test_keeps_newlines_untranslated(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.csv"

        write_text_atomic(path, "a\nb\n")

        assert path.read_bytes() == b"a\nb\n"


def test_write_files_atomic_returns_paths_in_order(tmp_path: Path) -> None:
    files = {tmp_path / "b.txt": "b", tmp_path / "a.txt": "a"}

    written = write_files_atomic(files)

    assert written == [tmp_path / "b.txt", tmp_path / "a.txt"]
    assert (tmp_path / "a.txt").read_text() == "a"
