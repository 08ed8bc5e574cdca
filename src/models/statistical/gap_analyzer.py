"""
src/models/statistical/gap_analyzer.py
Score numbers by their gap (draws since last appearance).
Numbers that have been absent for longer are "due".
"""
from __future__ import annotations

from typing import Sequence

from src.models.statistical.draws import Draw, primary_numbers


class GapAnalyzer:
    """Score each number based on draws since last appearance."""

    def __init__(self, number_range: tuple[int, int] = (1, 45), pick_count: int = 6):
        self.lo, self.hi = number_range
        self.pick_count = pick_count

    def get_gaps(self, history: Sequence[Draw]) -> dict[int, int]:
        """
        Returns {number: index of the most recent draw containing it}.
        History is newest-first, so 0 means "in the latest draw".
        If never seen, gap = len(history).
        """
        gaps: dict[int, int] = {}
        for idx, draw in enumerate(history):
            for num in primary_numbers(draw, self.pick_count):
                gaps.setdefault(num, idx)
        return {n: gaps.get(n, len(history)) for n in range(self.lo, self.hi + 1)}

    def get_scores(self, history: Sequence[Draw]) -> dict[int, float]:
        """Gap as a fraction of the history length, in [0, 1]."""
        n_draws = len(history)
        if n_draws == 0:
            return {n: 0.0 for n in range(self.lo, self.hi + 1)}
        gaps = self.get_gaps(history)
        return {n: g / n_draws for n, g in gaps.items()}

