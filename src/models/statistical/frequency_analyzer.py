"""
src/models/statistical/frequency_analyzer.py
Raw and recency-weighted frequency of each number in the draw history.
"""
from __future__ import annotations

from typing import Sequence

from src.models.statistical.draws import Draw, primary_numbers


class FrequencyAnalyzer:
    """Count how often each number appears, overall and in the recent window."""

    def __init__(
        self,
        number_range: tuple[int, int] = (1, 45),
        window: int = 50,
        weight_total: float = 0.3,
        weight_recent: float = 0.7,
        pick_count: int = 6,
    ):
        self.lo, self.hi = number_range
        self.window = window
        self.weight_total = weight_total
        self.weight_recent = weight_recent
        self.pick_count = pick_count

    def get_frequency(self, history: Sequence[Draw]) -> dict[int, float]:
        """
        Returns {number: occurrences} for every number in range.
        Bonus numbers are not counted.
        """
        counts: dict[int, float] = {n: 0.0 for n in range(self.lo, self.hi + 1)}
        for draw in history:
            for num in primary_numbers(draw, self.pick_count):
                if self.lo <= num <= self.hi:
                    counts[num] += 1
        return counts

    def get_weighted_scores(self, history: Sequence[Draw]) -> dict[int, float]:
        """
        Blend the all-time appearance rate with the rate over the most
        recent `window` draws. An empty history scores every number 0.
        """
        n_draws = len(history)
        if n_draws == 0:
            return {n: 0.0 for n in range(self.lo, self.hi + 1)}

        recent = history[: min(self.window, n_draws)]
        total_freq = self.get_frequency(history)
        recent_freq = self.get_frequency(recent)

        return {
            n: self.weight_total * (total_freq[n] / n_draws)
            + self.weight_recent * (recent_freq[n] / len(recent))
            for n in range(self.lo, self.hi + 1)
        }

