"""Export of a finished competition result.

Every file is rendered in memory from the complete `CompetitionResult`
before anything touches disk, and each file is then written atomically.
Scores are exported as decimal strings; nothing run-specific such as a
timestamp goes into the outputs, so identical inputs give byte-identical
files.

Files written to the result folder:
    - constants.json: competition score and per-character weights
    - trial_scores.csv: one row per team, character and trial
    - character_scores.csv: one row per team and character
    - prompt_scores_ranks.csv: final ranking
"""

import csv
import io
import json
from pathlib import Path
from typing import Any

from pcgscore.common.config import ScoringConfig
from pcgscore.common.persistence import write_files_atomic
from pcgscore.scoring.decimal_math import render
from pcgscore.scoring.models import CompetitionResult

CONSTANTS_FILE = "constants.json"
TRIALS_FILE = "trial_scores.csv"
CHARACTERS_FILE = "character_scores.csv"
RANKS_FILE = "prompt_scores_ranks.csv"

TRIAL_FIELDS = [
    "teamName",
    "character",
    "trial",
    "trial_Score",
    "stabilityScore",
    "similarityScore",
]
CHARACTER_FIELDS = [
    "teamName",
    "character",
    "characterScore",
    "nonWeightedAverageStabilityScore",
    "nonWeightedAverageSimilarityScore",
]
RANK_FIELDS = ["team", "promptScore", "normalizedPromptScore", "rank"]


def _render_optional(value) -> str:
    return render(value) if value is not None else ""


def constants_document(result: CompetitionResult, config: ScoringConfig) -> dict[str, Any]:
    weights = []
    for w in result.weights:
        entry = {
            "character": w.character,
            "weight": render(w.weight),
            "weightStability": render(w.weight_stability),
            "weightSimilarity": render(w.weight_similarity),
        }
        if config.diversity_enabled:
            entry["weightDiversity"] = render(w.weight_diversity)
        weights.append(entry)
    return {"competitionScore": render(result.competition_score), "weights": weights}


def trial_rows(result: CompetitionResult) -> list[dict[str, Any]]:
    return [
        {
            "teamName": trial.team,
            "character": trial.character,
            "trial": trial.trial,
            "trial_Score": _render_optional(trial.value),
            "stabilityScore": render(trial.stability),
            "similarityScore": render(trial.similarity),
        }
        for team in result.teams
        for trial in team.trial_scores
    ]


def character_rows(result: CompetitionResult, config: ScoringConfig) -> list[dict[str, Any]]:
    rows = []
    for team in result.teams:
        for score in team.character_scores:
            row = {
                "teamName": score.team,
                "character": score.character,
                "characterScore": render(score.value),
                "nonWeightedAverageStabilityScore": render(score.average_stability),
                "nonWeightedAverageSimilarityScore": render(score.average_similarity),
            }
            if config.diversity_enabled:
                row["diversityScore"] = _render_optional(score.diversity)
            rows.append(row)
    return rows


def rank_rows(result: CompetitionResult) -> list[dict[str, Any]]:
    return [
        {
            "team": entry.team,
            "promptScore": render(entry.prompt_score),
            "normalizedPromptScore": render(entry.normalized_score),
            "rank": entry.rank,
        }
        for entry in result.rankings
    ]


def to_csv(fieldnames: list[str], rows: list[dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def render_outputs(
    result: CompetitionResult, config: ScoringConfig, output_dir: str | Path
) -> dict[Path, str]:
    """Render every export file in memory.

    Returns:
        Mapping of destination path to file content
    """
    output_dir = Path(output_dir)
    character_fields = list(CHARACTER_FIELDS)
    if config.diversity_enabled:
        character_fields.append("diversityScore")

    return {
        output_dir / CONSTANTS_FILE: json.dumps(constants_document(result, config), indent=2)
        + "\n",
        output_dir / TRIALS_FILE: to_csv(TRIAL_FIELDS, trial_rows(result)),
        output_dir / CHARACTERS_FILE: to_csv(character_fields, character_rows(result, config)),
        output_dir / RANKS_FILE: to_csv(RANK_FIELDS, rank_rows(result)),
    }


def export_results(
    result: CompetitionResult, config: ScoringConfig, output_dir: str | Path
) -> list[Path]:
    """Write all export files to `output_dir`.

    Args:
        result: Complete competition result
        config: Scoring configuration (diversity columns)
        output_dir: Result folder, created if missing

    Returns:
        Paths of the written files
    """
    return write_files_atomic(render_outputs(result, config, output_dir))
