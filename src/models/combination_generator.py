"""
src/models/combination_generator.py
Best-of-N search over weighted-random combinations → 5 diversified sets.
"""
from __future__ import annotations

import random
from typing import Sequence

from src.models.combination_scorer import CombinationScorer
from src.models.statistical.draws import Draw
from src.models.statistical.score_model import ScoreModel
from src.models.types import Combination, NumberScore
from src.models.weighted_sampler import sample_combination
from src.utils.config import RecommenderConfig
from src.utils.logger import get_logger

log = get_logger("model.generator")


class CombinationGenerator:
    """
    For each recommendation slot, sample `trials_per_slot` candidates from
    the final scores, keep the highest-scoring one (first wins on ties), then
    exclude its smallest `excluded_per_slot` numbers from later slots so the
    sets do not converge on the same numbers.
    """

    def __init__(
        self,
        config: RecommenderConfig | None = None,
        rng: random.Random | None = None,
        validate: bool = True,
    ):
        self.config = config or RecommenderConfig()
        self.rng = rng or random.Random()
        self.score_model = ScoreModel(self.config, validate=validate)
        self.scorer = CombinationScorer(self.config)

    # ── Search ────────────────────────────────────────────────────

    def best_of_trials(self, scores: NumberScore, excluded: set[int]) -> Combination:
        """Run one slot's trials and return the winning combination."""
        best_numbers: list[int] = []
        best_score = float("-inf")
        for _ in range(self.config.trials_per_slot):
            candidate = sample_combination(scores, self.rng, excluded, self.config.pick_count)
            score = self.scorer.total_score(candidate, scores)
            if score > best_score:
                best_score = score
                best_numbers = candidate
        return Combination(numbers=tuple(best_numbers), score=best_score)

    def generate(self, scores: NumberScore) -> list[Combination]:
        """Fill every slot from a precomputed final-score mapping."""
        combinations: list[Combination] = []
        excluded: set[int] = set()

        for slot in range(self.config.combination_count):
            combo = self.best_of_trials(scores, excluded)
            combinations.append(combo)
            log.debug(f"Slot {slot + 1}: {list(combo.numbers)} score={combo.score:.2f} excluded={sorted(excluded)}")
            excluded.update(combo.numbers[: self.config.excluded_per_slot])

        return combinations

    # ── Prediction ────────────────────────────────────────────────

    def recommend(self, draws: Sequence[Draw]) -> list[Combination]:
        """Score the history and return the recommendation set."""
        final_scores = self.score_model.compute_final_score(draws)
        combinations = self.generate(final_scores)
        log.info(f"Recommended {len(combinations)} sets from {len(draws)} draws: "
                 f"{[list(c.numbers) for c in combinations]}")
        return combinations
