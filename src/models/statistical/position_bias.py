"""
src/models/statistical/position_bias.py
Low/mid/high band and odd/even classification of a combination.
"""
from __future__ import annotations

from collections import Counter
from typing import Sequence


class PositionBiasAnalyzer:
    """Classify numbers into range bands and check a pick for balance."""

    def __init__(self, position_balance: dict[str, Sequence[int]]):
        """
        position_balance: {"low": [1, 15], "mid": [16, 30], "high": [31, 45]}
        """
        self.bands = {
            zone: (bounds[0], bounds[1])
            for zone, bounds in position_balance.items()
        }

    def get_zone(self, num: int) -> str | None:
        for zone, (lo, hi) in self.bands.items():
            if lo <= num <= hi:
                return zone
        return None

    def get_zone_counts(self, numbers: Sequence[int]) -> dict[str, int]:
        counter = Counter(self.get_zone(n) for n in numbers)
        return {z: counter.get(z, 0) for z in self.bands}

    def covers_all_zones(self, numbers: Sequence[int]) -> bool:
        """True if every band holds at least one of the numbers."""
        return all(count >= 1 for count in self.get_zone_counts(numbers).values())

    @staticmethod
    def even_count(numbers: Sequence[int]) -> int:
        return sum(1 for n in numbers if n % 2 == 0)
