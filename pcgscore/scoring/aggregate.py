"""Competition score, normalization and ranking."""

from collections.abc import Sequence
from decimal import Decimal

from pcgscore.scoring.decimal_math import (
    DEFAULT_DECIMAL_PLACES,
    HUNDRED,
    ONE,
    add_all,
    divide,
    mul,
    or_zero,
)
from pcgscore.scoring.models import PromptScore, RankedPromptScore


def competition_score(prompt_scores: Sequence[PromptScore]) -> Decimal:
    """Sum of all prompt scores; undefined prompt scores count as zero."""
    return add_all(p.value for p in prompt_scores)


def normalize_and_rank(
    prompt_scores: Sequence[PromptScore],
    competition: Decimal,
    places: int = DEFAULT_DECIMAL_PLACES,
) -> list[RankedPromptScore]:
    """Normalize prompt scores to a percentage of the competition score and rank them.

    A competition score of exactly zero divides by one instead, so every
    team gets 0%. Ranking is a stable descending sort: teams with equal
    normalized scores keep their input order.

    Args:
        prompt_scores: Prompt score of every team, in team order
        competition: Competition score (sum of prompt scores)
        places: Decimal places of the division

    Returns:
        Leaderboard entries, best first, ranks starting at 1

    Example:
        >>> from decimal import Decimal
        >>> scores = [PromptScore("a", Decimal(1)), PromptScore("b", Decimal(0))]
        >>> [(r.team, r.rank) for r in normalize_and_rank(scores, Decimal(1))]
        [('a', 1), ('b', 2)]
    """
    divisor = ONE if competition.is_zero() else competition

    normalized = [
        (p.team, or_zero(p.value), mul(divide(or_zero(p.value), divisor, places), HUNDRED))
        for p in prompt_scores
    ]
    normalized.sort(key=lambda entry: entry[2], reverse=True)

    return [
        RankedPromptScore(team=team, prompt_score=score, normalized_score=norm, rank=rank)
        for rank, (team, score, norm) in enumerate(normalized, start=1)
    ]
