"""
src/models/combination_scorer.py
Composite heuristic score of a candidate combination.
"""
from __future__ import annotations

from typing import Sequence

from src.models.statistical.position_bias import PositionBiasAnalyzer
from src.models.types import NumberScore
from src.utils.config import RecommenderConfig


class CombinationScorer:
    """
    total = sum(final[n]) / score_sum_divisor
            + gap_score + balance_score + consecutive_score
    """

    def __init__(self, config: RecommenderConfig | None = None):
        self.config = config or RecommenderConfig()
        self.position_bias = PositionBiasAnalyzer(position_balance=self.config.bands)

    def gap_score(self, combination: Sequence[int]) -> float:
        """
        Reward spacing close to the ideal average gap (45 / 6 = 7.5),
        floored at 0. Wrong-sized combinations score 0.
        """
        cfg = self.config
        if len(combination) != cfg.pick_count:
            return 0.0
        nums = sorted(combination)
        gaps = [b - a for a, b in zip(nums, nums[1:])]
        avg_gap = sum(gaps) / len(gaps)
        return max(0.0, cfg.gap_ceiling - abs(avg_gap - cfg.ideal_gap))

    def balance_score(self, combination: Sequence[int]) -> float:
        """Parity balance plus low/mid/high band coverage."""
        cfg = self.config
        if len(combination) != cfg.pick_count:
            return 0.0
        score = 0.0
        even_lo, even_hi = cfg.even_range
        if even_lo <= self.position_bias.even_count(combination) <= even_hi:
            score += cfg.parity_points
        if self.position_bias.covers_all_zones(combination):
            score += cfg.band_points
        return score

    def consecutive_score(self, combination: Sequence[int]) -> float:
        """Penalize runs: award points only while consecutive pairs stay few."""
        nums = sorted(combination)
        pairs = sum(1 for a, b in zip(nums, nums[1:]) if b - a == 1)
        return self.config.consecutive_points if pairs <= self.config.max_consecutive_pairs else 0.0

    def total_score(self, combination: Sequence[int], scores: NumberScore) -> float:
        score_sum = sum(scores.get(n, 0.0) for n in combination)
        return (
            score_sum / self.config.score_sum_divisor
            + self.gap_score(combination)
            + self.balance_score(combination)
            + self.consecutive_score(combination)
        )
