"""Data models for competition scoring.

Result documents read from disk are Pydantic models; every record derived
from them during a run is a frozen dataclass, created once and never
mutated.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from pcgscore.scoring.decimal_math import ZERO, to_decimal


class _ResultDocument(BaseModel):
    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, alias_generator=to_camel, frozen=True
    )


class StabilityRaw(_ResultDocument):
    tag: Any = None
    score: Decimal = ZERO

    @field_validator("score", mode="before")
    @classmethod
    def validate_score(cls, v) -> Decimal:
        return to_decimal(v)


class StabilityResult(_ResultDocument):
    """Stability document: `{dataCount, rate, raws: [{tag, score}]}`."""

    data_count: Any = None
    rate: Decimal = ZERO
    raws: list[StabilityRaw] = []

    @field_validator("rate", mode="before")
    @classmethod
    def validate_rate(cls, v) -> Decimal:
        return to_decimal(v)

    def values(self) -> list[Decimal]:
        """Per-trial stability scores in trial order."""
        return [raw.score for raw in self.raws]

    @classmethod
    def zero(cls) -> "StabilityResult":
        return cls()


class SimilarityTrial(_ResultDocument):
    id: Any = None
    label: Any = None
    similarity: Decimal = ZERO

    @field_validator("similarity", mode="before")
    @classmethod
    def validate_similarity(cls, v) -> Decimal:
        return to_decimal(v)


class SimilarityResult(_ResultDocument):
    """Similarity document: `{count, similarityRate, trials, similarities}`."""

    count: Any = None
    similarity_rate: Decimal = ZERO
    trials: list[SimilarityTrial] = []
    similarities: Any = None

    @field_validator("similarity_rate", mode="before")
    @classmethod
    def validate_similarity_rate(cls, v) -> Decimal:
        return to_decimal(v)

    def values(self) -> list[Decimal]:
        """Per-trial similarity values in trial order."""
        return [trial.similarity for trial in self.trials]

    @classmethod
    def zero(cls) -> "SimilarityResult":
        return cls()


class DiversityResult(_ResultDocument):
    """Diversity document: `{count, diversityRate, trials, diversities}`."""

    count: Any = None
    diversity_rate: Decimal = ZERO
    trials: Any = None
    diversities: Any = None

    @field_validator("diversity_rate", mode="before")
    @classmethod
    def validate_diversity_rate(cls, v) -> Decimal:
        return to_decimal(v)

    @property
    def rate(self) -> Decimal:
        return self.diversity_rate

    @classmethod
    def zero(cls) -> "DiversityResult":
        return cls()


@dataclass(frozen=True)
class CharacterResults:
    """Raw results of one character for one team, across all axes."""

    stability: StabilityResult = field(default_factory=StabilityResult.zero)
    similarity: SimilarityResult = field(default_factory=SimilarityResult.zero)
    diversity: DiversityResult = field(default_factory=DiversityResult.zero)


# (team, character) -> results
RawResults = dict[tuple[str, str], CharacterResults]


@dataclass(frozen=True)
class TeamFiles:
    """Result files a team submitted, per axis."""

    team: str
    stability: tuple[str, ...]
    similarity: tuple[str, ...]


@dataclass(frozen=True)
class CharacterWeight:
    """Competition-wide weight of one character."""

    character: str
    weight_stability: Decimal
    weight_similarity: Decimal
    weight_diversity: Decimal
    weight: Decimal


@dataclass(frozen=True)
class TrialScore:
    """Score of one trial; `value` is None when the character has no weight."""

    team: str
    character: str
    trial: int
    value: Decimal | None
    stability: Decimal
    similarity: Decimal


@dataclass(frozen=True)
class CharacterScore:
    team: str
    character: str
    value: Decimal
    average_stability: Decimal
    average_similarity: Decimal
    diversity: Decimal | None = None


@dataclass(frozen=True)
class PromptScore:
    """Score of one team; `value` is None when the team scored no characters."""

    team: str
    value: Decimal | None


@dataclass(frozen=True)
class RankedPromptScore:
    """Final leaderboard entry."""

    team: str
    prompt_score: Decimal
    normalized_score: Decimal
    rank: int


@dataclass(frozen=True)
class TeamScores:
    team: str
    trial_scores: tuple[TrialScore, ...]
    character_scores: tuple[CharacterScore, ...]
    prompt_score: PromptScore


@dataclass(frozen=True)
class CompetitionResult:
    """Everything a run produces, ready for export."""

    weights: tuple[CharacterWeight, ...]
    teams: tuple[TeamScores, ...]
    competition_score: Decimal
    rankings: tuple[RankedPromptScore, ...]
    skipped_teams: tuple[str, ...] = ()
