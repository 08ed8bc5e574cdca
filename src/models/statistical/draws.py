"""
src/models/statistical/draws.py
Primary-number extraction and validation of the draw corpus.
"""
from __future__ import annotations

from typing import Sequence

from src.utils.logger import get_logger

log = get_logger("model.draws")

Draw = Sequence[int]


class MalformedDrawError(ValueError):
    """A historical draw that cannot be scored."""

    def __init__(self, index: int, draw: Draw, reason: str):
        self.index = index
        self.draw = list(draw)
        self.reason = reason
        super().__init__(f"Draw #{index} {self.draw}: {reason}")


def primary_numbers(draw: Draw, pick_count: int = 6) -> list[int]:
    """First `pick_count` entries of a draw; a trailing bonus number is dropped."""
    return list(draw[:pick_count])


def validate_draws(
    draws: Sequence[Draw],
    number_range: tuple[int, int] = (1, 45),
    pick_count: int = 6,
) -> None:
    """
    Fail fast on records the score model cannot use.
    Only the primary numbers are checked; a bonus entry may repeat one of them.
    """
    lo, hi = number_range
    for idx, draw in enumerate(draws):
        if len(draw) < pick_count:
            raise MalformedDrawError(idx, draw, f"expected {pick_count} primary numbers, got {len(draw)}")
        nums = primary_numbers(draw, pick_count)
        if not all(isinstance(n, int) and not isinstance(n, bool) for n in nums):
            raise MalformedDrawError(idx, draw, "numbers must be integers")
        if len(set(nums)) != pick_count:
            raise MalformedDrawError(idx, draw, "duplicate primary numbers")
        out_of_range = [n for n in nums if not lo <= n <= hi]
        if out_of_range:
            raise MalformedDrawError(idx, draw, f"numbers out of range [{lo},{hi}]: {out_of_range}")
    log.debug(f"Validated {len(draws)} draws")
