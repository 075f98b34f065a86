from pcgscore.scoring.aggregate import competition_score, normalize_and_rank
from pcgscore.scoring.errors import InconsistentTeamDataError, MissingDataError, ScoringError
from pcgscore.scoring.models import (
    CharacterScore,
    CharacterWeight,
    CompetitionResult,
    PromptScore,
    RankedPromptScore,
    TrialScore,
)
from pcgscore.scoring.pipeline import run_scoring, score_competition
from pcgscore.scoring.readers import ResultReader
from pcgscore.scoring.report import export_results
from pcgscore.scoring.scorer import score_team
from pcgscore.scoring.weights import WeightTable, compute_weights

__all__ = [
    "CharacterScore",
    "CharacterWeight",
    "CompetitionResult",
    "InconsistentTeamDataError",
    "MissingDataError",
    "PromptScore",
    "RankedPromptScore",
    "ResultReader",
    "ScoringError",
    "TrialScore",
    "WeightTable",
    "competition_score",
    "compute_weights",
    "export_results",
    "normalize_and_rank",
    "run_scoring",
    "score_competition",
    "score_team",
]
