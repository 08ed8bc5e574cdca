"""
src/ai/recommendation_parser.py
Prompt rendering, response parsing and cross-check for a generative-AI
recommendation. The provider call itself lives outside this package.
"""
from __future__ import annotations

import json
import re
from collections import Counter
from typing import Any, Sequence

from src.models.types import Combination
from src.utils.config import LOTTO_CALCULATE_PROMPT, RecommenderConfig
from src.utils.logger import get_logger

log = get_logger("ai.parser")

LOTTO_SYSTEM_PROMPT = (
    "You are an assistant that recommends lottery numbers. "
    "Reply with valid JSON only."
)

LOTTO_GENERATION_PROMPT = """
Past winning numbers, newest first:
{LOTTO_HISTORY_DATA}

{CALCULATE_PROMPT}

Using the data and formulas above, recommend {COUNT} lottery tickets. Each ticket is
{PICK} distinct numbers between {LO} and {HI}.
Reply only with JSON shaped like [[ticket 1], ..., [ticket {COUNT}]]. No explanation.
"""

DEFAULT_CALCULATE_PROMPT = """
# Probability hints
1. Frequency: P(n) = appearances of n / number of draws.
2. Moving average over the most recent draws.
3. Odd/even and low/high balance of each ticket.
4. Geometric distribution: P(X = k) = (1 - p)^(k-1) * p for numbers absent for k draws.
"""

_JSON_BLOCK_START_RE = re.compile(r"\[\s*\[")
_DECODER = json.JSONDecoder()


class InvalidRecommendationError(ValueError):
    """AI response that does not contain a usable recommendation set."""


def build_prompt(
    draws: Sequence[Sequence[int]],
    calculate_prompt: str | None = None,
    config: RecommenderConfig | None = None,
) -> str:
    cfg = config or RecommenderConfig()
    lo, hi = cfg.number_range
    hint = calculate_prompt or LOTTO_CALCULATE_PROMPT or DEFAULT_CALCULATE_PROMPT
    return (
        LOTTO_GENERATION_PROMPT
        .replace("{LOTTO_HISTORY_DATA}", json.dumps([list(d) for d in draws]))
        .replace("{CALCULATE_PROMPT}", hint.strip())
        .replace("{COUNT}", str(cfg.combination_count))
        .replace("{PICK}", str(cfg.pick_count))
        .replace("{LO}", str(lo))
        .replace("{HI}", str(hi))
    )


def build_messages(
    draws: Sequence[Sequence[int]],
    calculate_prompt: str | None = None,
    config: RecommenderConfig | None = None,
) -> list[dict[str, str]]:
    """Chat-style request body: system instruction plus the rendered prompt."""
    return [
        {"role": "system", "content": LOTTO_SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(draws, calculate_prompt, config)},
    ]


def validate_recommendations(sets: Any, config: RecommenderConfig | None = None) -> None:
    cfg = config or RecommenderConfig()
    lo, hi = cfg.number_range
    if not isinstance(sets, list) or len(sets) != cfg.combination_count:
        raise InvalidRecommendationError(f"Expected {cfg.combination_count} sets, got {sets!r}")
    for ticket in sets:
        if not isinstance(ticket, list) or len(ticket) != cfg.pick_count:
            raise InvalidRecommendationError(f"Each set needs {cfg.pick_count} numbers: {ticket!r}")
        for num in ticket:
            if not isinstance(num, int) or isinstance(num, bool) or not lo <= num <= hi:
                raise InvalidRecommendationError(f"Numbers must be integers in [{lo},{hi}]: {ticket!r}")
        if len(set(ticket)) != cfg.pick_count:
            raise InvalidRecommendationError(f"Duplicate numbers in set: {ticket!r}")


def extract_recommendations(text: str, config: RecommenderConfig | None = None) -> list[list[int]]:
    """Pull the first [[...]] JSON block out of a free-text response."""
    match = _JSON_BLOCK_START_RE.search(text or "")
    if not match:
        raise InvalidRecommendationError("No [[...]] JSON block found in AI response.")
    try:
        sets, _ = _DECODER.raw_decode(text, match.start())
    except json.JSONDecodeError as exc:
        raise InvalidRecommendationError(f"AI response is not valid JSON: {exc}") from exc
    validate_recommendations(sets, config)
    return [sorted(s) for s in sets]


def cross_check(ai_sets: Sequence[Sequence[int]], combinations: Sequence[Combination]) -> dict[str, Any]:
    """
    Match every statistical set with the AI set it overlaps most.
    Consensus = numbers recommended by both sources, most shared first.
    """
    slots = []
    for idx, combo in enumerate(combinations):
        ours = set(combo.numbers)
        best_idx, best_shared = -1, set()
        for ai_idx, ai_set in enumerate(ai_sets):
            shared = ours & set(ai_set)
            if len(shared) > len(best_shared):
                best_idx, best_shared = ai_idx, shared
        slots.append({
            "slot": idx + 1,
            "numbers": list(combo.numbers),
            "ai_set": list(ai_sets[best_idx]) if best_idx >= 0 else [],
            "shared": sorted(best_shared),
        })

    stat_counts = Counter(n for combo in combinations for n in combo.numbers)
    ai_numbers = {n for s in ai_sets for n in s}
    consensus = sorted((n for n in stat_counts if n in ai_numbers), key=lambda n: (-stat_counts[n], n))

    log.info(f"AI cross-check — consensus numbers: {consensus}")
    return {"slots": slots, "consensus": consensus}
