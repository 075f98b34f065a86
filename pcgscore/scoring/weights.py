"""Per-character weights derived from competition-wide performance.

A character's weight is high when every team does poorly on it, rewarding
prompts that handle the hard characters. For each enabled axis::

    average = sum over teams of the axis values / (teams x trials)
    axis weight = max(1 - average, 1 / number of characters)

Diversity contributes one rate per team, so its average divides by the
number of teams only. The floor keeps every axis weight strictly positive
even when all teams are perfect on a character. The combined weight is the
product of the enabled axis weights.

Weights need every team's results and are computed exactly once per run,
before any trial score.
"""

from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal

from pcgscore.common.config import ScoringConfig
from pcgscore.scoring.decimal_math import ONE, ZERO, add_all, divide, dmax, mul, sub
from pcgscore.scoring.models import CharacterResults, CharacterWeight, RawResults


def axis_average(totals: Sequence[Decimal], divisor: int, places: int) -> Decimal:
    """Average of per-team totals; zero when there is nothing to average."""
    if divisor == 0:
        return ZERO
    return divide(add_all(totals), divisor, places)


def axis_weight(average: Decimal, num_characters: int, places: int) -> Decimal:
    floor = divide(ONE, num_characters, places)
    return dmax(sub(ONE, average), floor)


def compute_character_weight(
    character: str,
    team_results: Sequence[CharacterResults],
    config: ScoringConfig,
) -> CharacterWeight:
    """Compute the weight of one character from every team's results.

    Args:
        character: Character ID
        team_results: One entry per team; teams without documents pass the
            zero defaults and still count in the divisor
        config: Scoring configuration

    Returns:
        CharacterWeight with each axis weight and their product
    """
    if config.disable_weights:
        return CharacterWeight(
            character=character,
            weight_stability=ONE,
            weight_similarity=ONE,
            weight_diversity=ONE,
            weight=ONE,
        )

    places = config.decimal_places
    num_characters = len(config.characters)
    num_teams = len(team_results)

    average_stability = axis_average(
        [add_all(r.stability.values()) for r in team_results],
        num_teams * config.num_trials,
        places,
    )
    average_similarity = axis_average(
        [add_all(r.similarity.values()) for r in team_results],
        num_teams * config.num_trials,
        places,
    )
    weight_stability = axis_weight(average_stability, num_characters, places)
    weight_similarity = axis_weight(average_similarity, num_characters, places)

    if config.diversity_enabled:
        average_diversity = axis_average(
            [r.diversity.rate for r in team_results], num_teams, places
        )
        weight_diversity = axis_weight(average_diversity, num_characters, places)
    else:
        weight_diversity = ONE

    return CharacterWeight(
        character=character,
        weight_stability=weight_stability,
        weight_similarity=weight_similarity,
        weight_diversity=weight_diversity,
        weight=mul(weight_stability, weight_similarity, weight_diversity),
    )


def compute_weights(
    raw_results: RawResults,
    teams: Sequence[str],
    config: ScoringConfig,
) -> list[CharacterWeight]:
    """Compute one weight per configured character, in configured order.

    Characters with no results anywhere still get a weight.
    """
    weights = []
    for character in config.characters:
        team_results = [raw_results.get((team, character), CharacterResults()) for team in teams]
        weights.append(compute_character_weight(character, team_results, config))
    return weights


class WeightTable:
    """Read-only character -> weight lookup."""

    def __init__(self, weights: Iterable[CharacterWeight]) -> None:
        self._weights: tuple[CharacterWeight, ...] = tuple(weights)
        self._by_character = {w.character: w for w in self._weights}

    def lookup(self, character: str) -> Decimal | None:
        """Combined weight of a character, or None if it has no weight."""
        weight = self._by_character.get(character)
        return weight.weight if weight is not None else None

    def get(self, character: str) -> CharacterWeight | None:
        return self._by_character.get(character)

    def __iter__(self) -> Iterator[CharacterWeight]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, character: object) -> bool:
        return character in self._by_character
