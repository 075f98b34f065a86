"""Tests for result readers and source folder enumeration."""

from decimal import Decimal
from pathlib import Path

import pytest

from competition_fixtures import read_log_entries, write_character, write_json
from pcgscore.common.config import ScoringConfig
from pcgscore.common.logging import JSONLogger
from pcgscore.scoring.errors import MissingDataError
from pcgscore.scoring.models import StabilityResult
from pcgscore.scoring.readers import ResultReader, load_result
from pcgscore.scoring.source import (
    character_from_filename,
    list_result_files,
    list_teams,
    result_path,
)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def reader(tmp_path: Path, log_dir: Path) -> ResultReader:
    logger = JSONLogger("scoring.readers", log_dir / "result_log_test.jsonl")
    return ResultReader(tmp_path / "source", ScoringConfig(diversity_enabled=True), logger)


class TestListTeams:
    """Tests for list_teams function."""

    def test_lists_sorted_team_folders(self, tmp_path: Path):
        for name in ["team_b", "team_a", ".hidden", "logs", "result"]:
            (tmp_path / name).mkdir()
        (tmp_path / "notes.txt").write_text("x")

        assert list_teams(tmp_path, {"logs", "result"}) == ["team_a", "team_b"]

    def test_reserved_folders_only_skipped_when_given(self, tmp_path: Path):
        (tmp_path / "logs").mkdir()

        assert list_teams(tmp_path) == ["logs"]


class TestListResultFiles:
    """Tests for list_result_files function."""

    def test_lists_visible_files(self, tmp_path: Path):
        folder = tmp_path / "stability"
        folder.mkdir()
        for name in ["B.json", "A.json", ".DS_Store"]:
            (folder / name).write_text("{}")
        (folder / "nested").mkdir()

        assert list_result_files(folder) == ["A.json", "B.json"]

    def test_missing_folder_returns_empty(self, tmp_path: Path):
        assert list_result_files(tmp_path / "missing") == []


class TestPaths:
    def test_character_from_filename(self):
        assert character_from_filename("A.json") == "A"
        assert character_from_filename("A") == "A"

    def test_result_path(self, tmp_path: Path):
        assert result_path(tmp_path, "t1", "similarity", "K") == tmp_path / "t1" / "similarity" / "K.json"


class TestLoadResult:
    """Tests for load_result function."""

    def test_missing_file_raises_missing_data(self, tmp_path: Path):
        with pytest.raises(MissingDataError) as exc_info:
            load_result(tmp_path / "A.json", StabilityResult, "t1", "A", "stability")

        assert exc_info.value.team == "t1"
        assert exc_info.value.character == "A"
        assert exc_info.value.axis == "stability"

    def test_malformed_file_raises_missing_data(self, tmp_path: Path):
        path = tmp_path / "A.json"
        path.write_text("{broken")

        with pytest.raises(MissingDataError):
            load_result(path, StabilityResult, "t1", "A", "stability")


class TestResultReader:
    """Tests for ResultReader class."""

    def test_reads_all_axes(self, tmp_path: Path, reader: ResultReader):
        write_character(tmp_path / "source", "t1", "A", [1, 0.5], [0.25, 1], diversity=0.8)

        assert reader.read_stability("t1", "A").values() == [Decimal(1), Decimal("0.5")]
        assert reader.read_similarity("t1", "A").values() == [Decimal("0.25"), Decimal(1)]
        assert reader.read_diversity("t1", "A").rate == Decimal("0.8")

    def test_missing_document_returns_zero_default_and_warns(
        self, reader: ResultReader, log_dir: Path
    ):
        """A missing file yields the empty default and a warning, never an error."""
        result = reader.read_similarity("t1", "Z")

        assert result.values() == []
        entries = read_log_entries(log_dir)
        assert len(entries) == 1
        assert entries[0]["level"] == "warning"
        assert entries[0]["metadata"]["axis"] == "similarity"
        assert entries[0]["metadata"]["character"] == "Z"

    def test_unparsable_document_returns_zero_default(
        self, tmp_path: Path, reader: ResultReader, log_dir: Path
    ):
        write_json(tmp_path / "source" / "t1" / "stability" / "A.json", ["not", "an", "object"])

        assert reader.read_stability("t1", "A").values() == []
        assert read_log_entries(log_dir)[0]["level"] == "warning"

    def test_read_character_skips_diversity_when_disabled(self, tmp_path: Path, log_dir: Path):
        logger = JSONLogger("scoring.readers", log_dir / "result_log_test.jsonl")
        reader = ResultReader(tmp_path / "source", ScoringConfig(), logger)
        write_character(tmp_path / "source", "t1", "A", [1], [1])

        results = reader.read_character("t1", "A")

        assert results.stability.values() == [Decimal(1)]
        assert results.diversity.rate == Decimal(0)
        assert read_log_entries(log_dir) == []

    def test_read_character_reads_diversity_when_enabled(
        self, tmp_path: Path, reader: ResultReader
    ):
        write_character(tmp_path / "source", "t1", "A", [1], [1], diversity=0.4)

        assert reader.read_character("t1", "A").diversity.rate == Decimal("0.4")

    def test_loosely_typed_documents_are_scored(
        self, tmp_path: Path, reader: ResultReader, log_dir: Path
    ):
        """Odd types in fields that are never scored do not zero the document."""
        write_json(
            tmp_path / "source" / "t1" / "stability" / "A.json",
            {"dataCount": None, "raws": [{"tag": None, "score": 1}]},
        )
        write_json(
            tmp_path / "source" / "t1" / "similarity" / "A.json",
            {"count": 1, "trials": [{"id": 1, "label": "A", "similarity": 1}]},
        )

        results = reader.read_character("t1", "A")

        assert results.stability.values() == [Decimal(1)]
        assert results.similarity.values() == [Decimal(1)]
        assert not [e for e in read_log_entries(log_dir) if e["metadata"]["axis"] != "diversity"]
