"""Trial, character and prompt scores for a single team.

    trial score     = weight(character) x stability[trial] x similarity[trial]
    character score = sum(trial scores) / N  [x diversity rate]
    prompt score    = sum(character scores) / characters scored

N is the configured trial count: missing trials count as zero and still
divide, so incomplete submissions are penalized. A character without a
weight yields trial scores of None, which every aggregation reads as zero.
"""

from collections.abc import Sequence
from decimal import Decimal

from pcgscore.common.config import ScoringConfig
from pcgscore.scoring.decimal_math import (
    DEFAULT_DECIMAL_PLACES,
    ZERO,
    add_all,
    divide,
    mul,
)
from pcgscore.scoring.errors import InconsistentTeamDataError
from pcgscore.scoring.models import (
    CharacterResults,
    CharacterScore,
    PromptScore,
    RawResults,
    TeamFiles,
    TeamScores,
    TrialScore,
)
from pcgscore.scoring.weights import WeightTable


def validate_team_files(team_files: TeamFiles) -> None:
    """Check a team submitted both axes for the same number of characters.

    Raises:
        InconsistentTeamDataError: If either axis has no files or the counts differ
    """
    stability_count = len(team_files.stability)
    similarity_count = len(team_files.similarity)
    if stability_count == 0 or similarity_count == 0 or stability_count != similarity_count:
        raise InconsistentTeamDataError(team_files.team, stability_count, similarity_count)


def trial_values(values: Sequence[Decimal], num_trials: int) -> list[Decimal]:
    """First `num_trials` values, zero-padded when fewer are present."""
    padded = list(values[:num_trials])
    padded.extend([ZERO] * (num_trials - len(padded)))
    return padded


def trial_score(
    weights: WeightTable, character: str, stability: Decimal, similarity: Decimal
) -> Decimal | None:
    weight = weights.lookup(character)
    if weight is None:
        return None
    return mul(weight, stability, similarity)


def character_score(
    trial_scores: Sequence[Decimal | None],
    num_trials: int,
    diversity: Decimal | None = None,
    places: int = DEFAULT_DECIMAL_PLACES,
) -> Decimal:
    score = divide(add_all(trial_scores), num_trials, places)
    if diversity is not None:
        score = mul(score, diversity)
    return score


def prompt_score(
    character_scores: Sequence[Decimal | None], places: int = DEFAULT_DECIMAL_PLACES
) -> Decimal | None:
    if not character_scores:
        return None
    return divide(add_all(character_scores), len(character_scores), places)


def average_axis(
    values: Sequence[Decimal], num_trials: int, places: int = DEFAULT_DECIMAL_PLACES
) -> Decimal:
    """Non-weighted average of one axis over the configured trial count."""
    return divide(add_all(values), num_trials, places)


def score_character(
    team: str,
    character: str,
    results: CharacterResults,
    weights: WeightTable,
    config: ScoringConfig,
) -> tuple[list[TrialScore], CharacterScore]:
    places = config.decimal_places
    stability = trial_values(results.stability.values(), config.num_trials)
    similarity = trial_values(results.similarity.values(), config.num_trials)

    trials = [
        TrialScore(
            team=team,
            character=character,
            trial=index + 1,
            value=trial_score(weights, character, s, m),
            stability=s,
            similarity=m,
        )
        for index, (s, m) in enumerate(zip(stability, similarity, strict=True))
    ]

    diversity = results.diversity.rate if config.diversity_enabled else None
    score = CharacterScore(
        team=team,
        character=character,
        value=character_score([t.value for t in trials], config.num_trials, diversity, places),
        average_stability=average_axis(stability, config.num_trials, places),
        average_similarity=average_axis(similarity, config.num_trials, places),
        diversity=diversity,
    )
    return trials, score


def score_team(
    team: str,
    characters: Sequence[str],
    raw_results: RawResults,
    weights: WeightTable,
    config: ScoringConfig,
) -> TeamScores:
    """Score every character a team submitted and aggregate to its prompt score.

    Args:
        team: Team (prompt) name
        characters: Characters the team submitted, in scoring order
        raw_results: Results of all teams keyed by (team, character)
        weights: Final weight table of the run
        config: Scoring configuration
    """
    all_trials: list[TrialScore] = []
    character_scores: list[CharacterScore] = []

    for character in characters:
        results = raw_results.get((team, character), CharacterResults())
        trials, score = score_character(team, character, results, weights, config)
        all_trials.extend(trials)
        character_scores.append(score)

    return TeamScores(
        team=team,
        trial_scores=tuple(all_trials),
        character_scores=tuple(character_scores),
        prompt_score=PromptScore(
            team=team,
            value=prompt_score([c.value for c in character_scores], config.decimal_places),
        ),
    )
