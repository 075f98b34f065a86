"""End-to-end scoring run.

Steps:
    1. Enumerate team folders and validate each team's result files
    2. Read every (team, character) result, concurrently up to a bound
    3. Compute character weights from all teams (must finish before 4)
    4. Score each team: trials, characters, prompt
    5. Sum the competition score, normalize and rank

Dependencies:
    - pcgscore.scoring.readers: result documents with zero defaults
    - pcgscore.scoring.weights: cross-team weight derivation
    - pcgscore.scoring.scorer: per-team scores
    - pcgscore.scoring.aggregate: competition score and ranking
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from pcgscore.common.config import ScoringConfig
from pcgscore.common.logging import JSONLogger, RunContext, get_run_id
from pcgscore.common.observability import scoring_span
from pcgscore.scoring.aggregate import competition_score, normalize_and_rank
from pcgscore.scoring.decimal_math import render
from pcgscore.scoring.errors import InconsistentTeamDataError
from pcgscore.scoring.models import (
    CharacterResults,
    CompetitionResult,
    RawResults,
    TeamFiles,
    TeamScores,
)
from pcgscore.scoring.readers import ResultReader
from pcgscore.scoring.scorer import score_team, validate_team_files
from pcgscore.scoring.source import character_from_filename, list_result_files, list_teams
from pcgscore.scoring.weights import WeightTable, compute_weights


def collect_team_files(
    source: Path, team: str, config: ScoringConfig, logger: JSONLogger
) -> TeamFiles:
    files = {}
    for axis, stage in (
        ("stability", config.stages.stability),
        ("similarity", config.stages.similarity),
    ):
        folder = source / team / stage
        if not folder.is_dir():
            logger.warning(
                f"Processing - prompt: {team} - Failed - {stage} folder does not exist",
                {"team": team, "axis": axis, "folder": str(folder)},
            )
        files[axis] = tuple(list_result_files(folder))
    return TeamFiles(team=team, stability=files["stability"], similarity=files["similarity"])


def submitted_characters(team_files: TeamFiles) -> list[str]:
    """Characters a team is scored on: its similarity result files."""
    return [character_from_filename(name) for name in team_files.similarity]


def _read_keys(teams: Sequence[TeamFiles], characters: Sequence[str]) -> list[tuple[str, str]]:
    keys: list[tuple[str, str]] = []
    for team_files in teams:
        wanted = dict.fromkeys([*characters, *submitted_characters(team_files)])
        keys.extend((team_files.team, character) for character in wanted)
    return keys


async def load_raw_results(
    reader: ResultReader,
    keys: Sequence[tuple[str, str]],
    max_concurrency: int,
) -> RawResults:
    """Read the results of every (team, character) key.

    Reads run in worker threads, at most `max_concurrency` at a time. The
    returned mapping follows `keys` order regardless of completion order.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _load(team: str, character: str) -> CharacterResults:
        async with semaphore:
            return await asyncio.to_thread(reader.read_character, team, character)

    results = await asyncio.gather(*(_load(team, character) for team, character in keys))
    return dict(zip(keys, results, strict=True))


def _log_team_scores(logger: JSONLogger, scores: TeamScores) -> None:
    for trial in scores.trial_scores:
        logger.info(
            f"Calculating trial score - prompt: {trial.team} - character: {trial.character} "
            f"- trial: {trial.trial}",
            {
                "stability": render(trial.stability),
                "similarity": render(trial.similarity),
                "trial_score": render(trial.value) if trial.value is not None else None,
            },
        )
    for character in scores.character_scores:
        logger.info(
            f"Calculating character score - prompt: {character.team} "
            f"- character: {character.character}",
            {
                "average_stability": render(character.average_stability),
                "average_similarity": render(character.average_similarity),
                "character_score": render(character.value),
            },
        )
    prompt = scores.prompt_score.value
    logger.info(
        f"Calculating prompt score - prompt: {scores.team}",
        {"prompt_score": render(prompt) if prompt is not None else None},
    )


async def _run(source: Path, config: ScoringConfig, run: RunContext) -> CompetitionResult:
    logger = run.get_logger("scoring.pipeline")
    reader = ResultReader(source, config, run.get_logger("scoring.readers"))

    team_files: list[TeamFiles] = []
    skipped: list[str] = []
    for team in list_teams(source, config.reserved_folders):
        logger.info(f"Processing - prompt: {team}", {"team": team})
        files = collect_team_files(source, team, config, logger)
        try:
            validate_team_files(files)
        except InconsistentTeamDataError as e:
            logger.error(
                f"Processing - prompt: {team} - Failed - {e}",
                {
                    "team": team,
                    "stability_count": e.stability_count,
                    "similarity_count": e.similarity_count,
                },
            )
            if config.strict_validation:
                raise
            skipped.append(team)
            continue
        team_files.append(files)

    teams = [files.team for files in team_files]
    raw_results = await load_raw_results(
        reader, _read_keys(team_files, config.characters), config.max_concurrency
    )

    weights = WeightTable(compute_weights(raw_results, teams, config))
    for weight in weights:
        logger.info(
            f"character: {weight.character}",
            {
                "weight": render(weight.weight),
                "weight_stability": render(weight.weight_stability),
                "weight_similarity": render(weight.weight_similarity),
                "weight_diversity": render(weight.weight_diversity),
            },
        )

    team_scores = []
    for files in team_files:
        scores = score_team(files.team, submitted_characters(files), raw_results, weights, config)
        _log_team_scores(logger, scores)
        team_scores.append(scores)

    prompt_scores = [scores.prompt_score for scores in team_scores]
    competition = competition_score(prompt_scores)
    logger.info(
        "Calculating competition score", {"competition_score": render(competition)}
    )

    rankings = normalize_and_rank(prompt_scores, competition, config.decimal_places)
    for entry in rankings:
        logger.info(
            f"Calculating normalized prompt score - prompt: {entry.team}",
            {"normalized_prompt_score": render(entry.normalized_score), "rank": entry.rank},
        )

    return CompetitionResult(
        weights=tuple(weights),
        teams=tuple(team_scores),
        competition_score=competition,
        rankings=tuple(rankings),
        skipped_teams=tuple(skipped),
    )


async def run_scoring(
    source: str | Path, config: ScoringConfig, run: RunContext
) -> CompetitionResult:
    """Score a competition source folder.

    Args:
        source: Folder with one sub-folder per team
        config: Scoring configuration
        run: Run context that owns the run log

    Returns:
        The complete, immutable competition result

    Raises:
        InconsistentTeamDataError: If a team's files are inconsistent and
            `config.strict_validation` is set
    """
    source = Path(source)
    with scoring_span(source, config, get_run_id()):
        return await _run(source, config, run)


def score_competition(
    source: str | Path, config: ScoringConfig, run: RunContext
) -> CompetitionResult:
    """Synchronous wrapper around `run_scoring`."""
    return asyncio.run(run_scoring(source, config, run))
