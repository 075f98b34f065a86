"""Readers for per-team, per-character result documents.

Reading is best-effort: a missing or unreadable document yields the
zero-valued default for its axis and a warning in the run log, so one
absent measurement contributes zero instead of aborting the run.
"""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pcgscore.common.config import ScoringConfig
from pcgscore.common.logging import JSONLogger
from pcgscore.scoring.errors import MissingDataError
from pcgscore.scoring.models import (
    CharacterResults,
    DiversityResult,
    SimilarityResult,
    StabilityResult,
)
from pcgscore.scoring.source import result_path

T = TypeVar("T", bound=BaseModel)


def load_result(path: Path, model_class: type[T], team: str, character: str, axis: str) -> T:
    """Parse one result document.

    Raises:
        MissingDataError: If the file is absent, unreadable or malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MissingDataError(
            f"Cannot read {path}: {e.strerror or e}", team, character, axis
        ) from e
    except UnicodeDecodeError as e:
        raise MissingDataError(f"Cannot decode {path}: {e}", team, character, axis) from e

    try:
        return model_class.model_validate_json(text)
    except ValidationError as e:
        raise MissingDataError(
            f"Invalid {axis} document {path}: {e.error_count()} error(s): "
            f"{e.errors()[0]['msg']}",
            team,
            character,
            axis,
        ) from e


class ResultReader:
    """Reads stability, similarity and diversity documents of a source folder.

    Args:
        source: Competition source folder (one sub-folder per team)
        config: Scoring configuration (stage folder names, diversity flag)
        logger: Run logger that receives a warning per missing document
    """

    def __init__(self, source: str | Path, config: ScoringConfig, logger: JSONLogger) -> None:
        self.source = Path(source)
        self.config = config
        self.logger = logger

    def _read(self, model_class: type[T], stage: str, team: str, character: str, axis: str) -> T:
        path = result_path(self.source, team, stage, character)
        try:
            return load_result(path, model_class, team, character, axis)
        except MissingDataError as e:
            self.logger.warning(
                f"Processing {axis} - prompt: {team} - character: {character}",
                {"team": team, "character": character, "axis": axis, "error": str(e)},
            )
            return model_class()

    def read_stability(self, team: str, character: str) -> StabilityResult:
        return self._read(StabilityResult, self.config.stages.stability, team, character, "stability")

    def read_similarity(self, team: str, character: str) -> SimilarityResult:
        return self._read(
            SimilarityResult, self.config.stages.similarity, team, character, "similarity"
        )

    def read_diversity(self, team: str, character: str) -> DiversityResult:
        return self._read(DiversityResult, self.config.stages.diversity, team, character, "diversity")

    def read_character(self, team: str, character: str) -> CharacterResults:
        """Read every enabled axis for one character of one team.

        The diversity document is only read when the diversity axis is
        enabled; otherwise the zero default is used without logging.
        """
        diversity = (
            self.read_diversity(team, character)
            if self.config.diversity_enabled
            else DiversityResult.zero()
        )
        return CharacterResults(
            stability=self.read_stability(team, character),
            similarity=self.read_similarity(team, character),
            diversity=diversity,
        )
