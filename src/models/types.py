"""
src/models/types.py
Value objects passed between the score model, the generator and the pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# {number: score}, one entry for every number in range.
NumberScore = dict[int, float]


@dataclass(frozen=True)
class Combination:
    numbers: tuple[int, ...]
    score: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "numbers", tuple(sorted(self.numbers)))

    def to_dict(self) -> dict[str, Any]:
        return {"numbers": list(self.numbers), "score": round(self.score, 4)}


@dataclass(frozen=True)
class ScoreAnalysis:
    """Per-number statistics computed from one draw corpus."""

    frequency: NumberScore
    weighted: NumberScore
    final: NumberScore
    last_seen: dict[int, int]
    draw_count: int

    def top_frequent(self, n: int = 10) -> list[tuple[int, int]]:
        """[(number, occurrences)] most frequent first."""
        ranked = sorted(self.frequency, key=lambda k: (-self.frequency[k], k))
        return [(k, int(self.frequency[k])) for k in ranked[:n]]

    def top_scored(self, n: int = 15) -> list[tuple[int, float]]:
        """[(number, final score)] highest first."""
        ranked = sorted(self.final, key=lambda k: (-self.final[k], k))
        return [(k, self.final[k]) for k in ranked[:n]]

    def top_overdue(self, n: int = 10) -> list[tuple[int, int]]:
        """[(number, draws since last seen)] longest absence first."""
        ranked = sorted(self.last_seen, key=lambda k: (-self.last_seen[k], k))
        return [(k, self.last_seen[k]) for k in ranked[:n]]
