"""Tests for character weight derivation."""

from decimal import Decimal

from pcgscore.common.config import ScoringConfig
from pcgscore.scoring.decimal_math import ONE, mul
from pcgscore.scoring.models import (
    CharacterResults,
    DiversityResult,
    SimilarityResult,
    SimilarityTrial,
    StabilityRaw,
    StabilityResult,
)
from pcgscore.scoring.weights import (
    WeightTable,
    axis_average,
    axis_weight,
    compute_character_weight,
    compute_weights,
)


def make_results(
    stability: list[str], similarity: list[str], diversity: str = "0"
) -> CharacterResults:
    return CharacterResults(
        stability=StabilityResult(raws=[StabilityRaw(score=Decimal(s)) for s in stability]),
        similarity=SimilarityResult(
            trials=[SimilarityTrial(similarity=Decimal(s)) for s in similarity]
        ),
        diversity=DiversityResult(diversity_rate=Decimal(diversity)),
    )


class TestAxisHelpers:
    def test_axis_average(self):
        assert axis_average([Decimal(1), Decimal(2)], 4, 20) == Decimal("0.75")

    def test_axis_average_without_divisor_is_zero(self):
        assert axis_average([], 0, 20) == Decimal(0)

    def test_axis_weight_is_one_minus_average(self):
        assert axis_weight(Decimal("0.2"), 2, 20) == Decimal("0.8")

    def test_axis_weight_floor(self):
        """A perfect average falls back to 1 / number of characters."""
        assert axis_weight(Decimal(1), 4, 20) == Decimal("0.25")


class TestComputeCharacterWeight:
    """Tests for compute_character_weight function."""

    def test_averages_over_teams_and_trials(self):
        config = ScoringConfig(num_trials=2, characters=["A", "B"])
        team_results = [make_results(["1", "1"], ["1", "1"]), make_results(["0", "0"], ["0", "0"])]

        weight = compute_character_weight("A", team_results, config)

        assert weight.weight_stability == Decimal("0.5")
        assert weight.weight_similarity == Decimal("0.5")
        assert weight.weight_diversity == ONE
        assert weight.weight == Decimal("0.25")

    def test_perfect_teams_hit_floor(self):
        """No axis weight drops below 1 / number of characters."""
        config = ScoringConfig(num_trials=2, characters=["A", "B", "C"])
        team_results = [make_results(["1", "1"], ["1", "1"])] * 3

        weight = compute_character_weight("A", team_results, config)

        floor = Decimal("0.33333333333333333333")
        assert weight.weight_stability == floor
        assert weight.weight_similarity == floor
        assert weight.weight == mul(floor, floor)
        assert weight.weight > 0

    def test_missing_trials_count_in_divisor(self):
        config = ScoringConfig(num_trials=4, characters=["A", "B", "C", "D", "E"])

        weight = compute_character_weight("A", [make_results(["1", "1"], ["1"])], config)

        assert weight.weight_stability == Decimal("0.5")
        assert weight.weight_similarity == Decimal("0.75")

    def test_diversity_axis_when_enabled(self):
        config = ScoringConfig(num_trials=1, characters=["A", "B", "C", "D"], diversity_enabled=True)
        team_results = [
            make_results(["0"], ["0"], diversity="0.6"),
            make_results(["0"], ["0"], diversity="0.2"),
        ]

        weight = compute_character_weight("A", team_results, config)

        assert weight.weight_diversity == Decimal("0.6")
        assert weight.weight == weight.weight_stability * weight.weight_similarity * Decimal("0.6")

    def test_disabled_weights_are_one(self):
        config = ScoringConfig(num_trials=2, characters=["A"], disable_weights=True, diversity_enabled=True)

        weight = compute_character_weight("A", [make_results(["0.3", "0.1"], ["1", "1"])], config)

        assert weight.weight == ONE
        assert weight.weight_stability == ONE
        assert weight.weight_similarity == ONE
        assert weight.weight_diversity == ONE

    def test_no_teams_gives_full_weight(self):
        config = ScoringConfig(num_trials=2, characters=["A", "B"])

        weight = compute_character_weight("A", [], config)

        assert weight.weight == ONE


class TestComputeWeights:
    """Tests for compute_weights function."""

    def test_one_weight_per_configured_character_in_order(self):
        config = ScoringConfig(num_trials=2, characters=["C", "A", "B"])
        raw = {("t1", "A"): make_results(["1", "1"], ["0.5", "0.5"])}

        weights = compute_weights(raw, ["t1"], config)

        assert [w.character for w in weights] == ["C", "A", "B"]
        assert weights[0].weight == ONE
        assert weights[1].weight_stability == Decimal("0.33333333333333333333")
        assert weights[1].weight_similarity == Decimal("0.5")

    def test_team_without_results_counts_as_zero(self):
        config = ScoringConfig(num_trials=1, characters=["A", "B"])
        raw = {("t1", "A"): make_results(["1"], ["1"])}

        weights = compute_weights(raw, ["t1", "t2"], config)

        assert weights[0].weight_stability == Decimal("0.5")

    def test_weight_is_product_of_axis_weights(self):
        config = ScoringConfig(num_trials=2, characters=list("ABCDEFGHIJ"), diversity_enabled=True)
        raw = {
            ("t1", "A"): make_results(["0.3", "0.9"], ["0.1", "0.4"], diversity="0.7"),
            ("t2", "A"): make_results(["0.2", "0.2"], ["0.6", "0.8"], diversity="0.1"),
        }

        for w in compute_weights(raw, ["t1", "t2"], config):
            assert w.weight == mul(w.weight_stability, w.weight_similarity, w.weight_diversity)
            assert min(w.weight_stability, w.weight_similarity, w.weight_diversity) >= Decimal("0.1")


class TestWeightTable:
    """Tests for WeightTable lookups."""

    def test_lookup_known_and_unknown(self):
        config = ScoringConfig(num_trials=1, characters=["A"])
        table = WeightTable(compute_weights({}, ["t1"], config))

        assert table.lookup("A") == ONE
        assert table.lookup("Z") is None
        assert "A" in table
        assert "Z" not in table
        assert len(table) == 1
        assert [w.character for w in table] == ["A"]
        assert table.get("A") is not None
