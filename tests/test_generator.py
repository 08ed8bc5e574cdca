"""tests/test_generator.py"""
import random
from collections import Counter
from unittest.mock import MagicMock, patch

import pytest

from src.models.combination_generator import CombinationGenerator
from src.models.types import Combination
from src.models.weighted_sampler import sample_combination, weighted_pick
from src.utils.config import RecommenderConfig

HISTORY_645 = [
    [5, 14, 22, 33, 41, 45, 7],
    [3, 11, 19, 28, 37, 40],
    [7, 14, 24, 35, 43, 44],
    [2, 9, 22, 30, 41, 42],
    [8, 17, 25, 36, 39, 45],
]


class FixedRandom:
    """Stand-in RNG returning a fixed draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def randrange(self, n: int) -> int:
        return n - 1


def assert_valid(combinations, count=5):
    assert len(combinations) == count
    for combo in combinations:
        nums = list(combo.numbers)
        assert len(nums) == 6
        assert len(set(nums)) == 6
        assert all(1 <= n <= 45 for n in nums)
        assert nums == sorted(nums)


class TestWeightedPick:
    def test_roulette_walk(self):
        candidates, weights = [1, 2, 3], [1.0, 1.0, 1.0]
        assert weighted_pick(candidates, weights, FixedRandom(0.0)) == 1
        assert weighted_pick(candidates, weights, FixedRandom(0.5)) == 2   # target 1.5
        assert weighted_pick(candidates, weights, FixedRandom(0.99)) == 3

    def test_boundary_meets_cumulative(self):
        # target == 1.0 == first cumulative weight → first candidate
        assert weighted_pick([1, 2], [1.0, 1.0], FixedRandom(0.5)) == 1

    def test_zero_weights_uniform_fallback(self):
        assert weighted_pick([4, 5, 6], [0.0, 0.0, 0.0], FixedRandom(0.0)) == 6
        rng = random.Random(3)
        seen = {weighted_pick([4, 5, 6], [0.0, 0.0, 0.0], rng) for _ in range(200)}
        assert seen == {4, 5, 6}

    def test_empty_pool(self):
        with pytest.raises(ValueError):
            weighted_pick([], [], random.Random(0))

    def test_higher_weight_picked_more_often(self):
        rng = random.Random(42)
        counts = Counter(weighted_pick([1, 2, 3], [50.0, 20.0, 5.0], rng) for _ in range(5000))
        assert counts[1] > counts[2] > counts[3]


class TestSampleCombination:
    def setup_method(self):
        self.scores = {n: float(n) for n in range(1, 46)}

    def test_six_distinct_sorted(self):
        nums = sample_combination(self.scores, random.Random(1))
        assert len(set(nums)) == 6
        assert nums == sorted(nums)

    def test_respects_exclusions(self):
        excluded = set(range(1, 30))
        rng = random.Random(7)
        for _ in range(50):
            nums = sample_combination(self.scores, rng, excluded)
            assert not excluded & set(nums)

    def test_pool_too_small(self):
        with pytest.raises(ValueError):
            sample_combination(self.scores, random.Random(0), excluded=range(1, 41))

    def test_skewed_scores_bias_selection(self):
        scores = {n: (100.0 if n <= 10 else 1.0) for n in range(1, 46)}
        rng = random.Random(11)
        counts = Counter(n for _ in range(500) for n in sample_combination(scores, rng))
        assert sum(counts[n] for n in range(1, 11)) > sum(counts[n] for n in range(11, 21))


class TestCombinationGenerator:
    def test_recommend_structure(self):
        gen = CombinationGenerator(rng=random.Random(2024))
        assert_valid(gen.recommend(HISTORY_645 * 10))

    def test_different_seeds_both_valid(self):
        a = CombinationGenerator(rng=random.Random(1)).recommend(HISTORY_645)
        b = CombinationGenerator(rng=random.Random(2)).recommend(HISTORY_645)
        assert_valid(a)
        assert_valid(b)

    def test_same_seed_reproducible(self):
        a = CombinationGenerator(rng=random.Random(99)).recommend(HISTORY_645)
        b = CombinationGenerator(rng=random.Random(99)).recommend(HISTORY_645)
        assert a == b

    def test_empty_corpus(self):
        assert_valid(CombinationGenerator(rng=random.Random(5)).recommend([]))

    def test_two_smallest_excluded_from_later_slots(self):
        combos = CombinationGenerator(rng=random.Random(8)).recommend(HISTORY_645)
        excluded: set[int] = set()
        for combo in combos:
            assert not excluded & set(combo.numbers)
            excluded.update(combo.numbers[:2])

    def test_scores_match_scorer(self):
        gen = CombinationGenerator(rng=random.Random(4))
        final = gen.score_model.compute_final_score(HISTORY_645)
        for combo in gen.generate(final):
            assert combo.score == pytest.approx(gen.scorer.total_score(combo.numbers, final))

    def test_best_trial_wins_first_on_ties(self):
        config = RecommenderConfig(trials_per_slot=5)
        gen = CombinationGenerator(config=config, rng=random.Random(0))
        samples = [[1, 2, 3, 4, 5, 6], [7, 8, 9, 10, 11, 12], [13, 14, 15, 16, 17, 18],
                   [19, 20, 21, 22, 23, 24], [25, 26, 27, 28, 29, 30]]
        gen.scorer = MagicMock()
        gen.scorer.total_score.side_effect = [1.0, 5.0, 3.0, 5.0, 2.0]
        with patch("src.models.combination_generator.sample_combination", side_effect=samples):
            best = gen.best_of_trials({n: 1.0 for n in range(1, 46)}, set())
        assert best == Combination(numbers=(7, 8, 9, 10, 11, 12), score=5.0)

    def test_trial_count(self):
        config = RecommenderConfig(trials_per_slot=3, combination_count=2)
        gen = CombinationGenerator(config=config, rng=random.Random(0))
        with patch("src.models.combination_generator.sample_combination",
                   wraps=sample_combination) as sampler:
            gen.recommend(HISTORY_645)
        assert sampler.call_count == 6

    def test_zero_weight_scores_fall_back_to_uniform(self):
        config = RecommenderConfig(baseline=0, frequency_scale=0, gap_scale=0)
        combos = CombinationGenerator(config=config, rng=random.Random(13)).recommend(HISTORY_645)
        assert_valid(combos)
