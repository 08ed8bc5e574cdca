"""
src/models/weighted_sampler.py
Roulette-wheel sampling without replacement over per-number scores.
"""
from __future__ import annotations

import random
from typing import Iterable

from src.models.types import NumberScore
from src.utils.logger import get_logger

log = get_logger("model.sampler")


def weighted_pick(candidates: list[int], weights: list[float], rng: random.Random) -> int:
    """
    Pick one candidate with probability proportional to its weight.
    Falls back to a uniform pick when every weight is zero.
    """
    if not candidates:
        raise ValueError("No candidates left to pick from.")

    total_weight = sum(weights)
    if total_weight == 0:
        log.debug(f"All {len(candidates)} candidates have zero weight — uniform pick.")
        return candidates[rng.randrange(len(candidates))]

    target = rng.random() * total_weight
    cumulative = 0.0
    for num, weight in zip(candidates, weights):
        cumulative += weight
        if cumulative >= target:
            return num
    # Float rounding can leave cumulative a hair below target.
    return candidates[-1]


def sample_combination(
    scores: NumberScore,
    rng: random.Random,
    excluded: Iterable[int] = (),
    pick_count: int = 6,
) -> list[int]:
    """Draw `pick_count` distinct numbers not in `excluded`, sorted ascending."""
    used = set(excluded)
    pool = [n for n in sorted(scores) if n not in used]
    if len(pool) < pick_count:
        raise ValueError(f"Only {len(pool)} numbers available, need {pick_count}.")

    weights = [scores[n] for n in pool]
    selected: list[int] = []
    for _ in range(pick_count):
        num = weighted_pick(pool, weights, rng)
        idx = pool.index(num)
        del pool[idx]
        del weights[idx]
        selected.append(num)
    return sorted(selected)
