"""
src/pipeline/recommendation_generator.py
Generate the recommendation set for the next purchase from a draw history.
"""
from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Sequence

from src.ai.recommendation_parser import InvalidRecommendationError, cross_check, extract_recommendations
from src.data.draw_loader import load_draws, sample_half
from src.models.combination_generator import CombinationGenerator
from src.models.statistical.draws import Draw, MalformedDrawError
from src.notifications.telegram_notifier import notify_recommendations
from src.utils.config import LOTTERY_LABELS, RecommenderConfig, get_recommender_config
from src.utils.logger import get_logger

log = get_logger("pipeline.recommend")


def generate_recommendations(
    draws: Sequence[Draw],
    config: RecommenderConfig | None = None,
    rng: random.Random | None = None,
    ai_text: str | None = None,
    lottery_type: str = "mega_645",
) -> dict[str, Any]:
    """
    1. Score the draw history
    2. Run the best-of-N generator → combinations
    3. Optionally parse an AI response and cross-check it
    4. Return result dict for Telegram / the CLI
    """
    config = config or get_recommender_config(lottery_type)
    label = LOTTERY_LABELS.get(lottery_type, lottery_type)
    log.info(f"[RECOMMEND] Starting for {lottery_type} with {len(draws)} draws")

    try:
        generator = CombinationGenerator(config=config, rng=rng)
        analysis = generator.score_model.analyze(draws)
        combinations = generator.generate(analysis.final)
    except MalformedDrawError as exc:
        log.error(f"[RECOMMEND] {lottery_type} failed: {exc}")
        return {"lottery_type": lottery_type, "lottery_label": label, "success": False, "error": str(exc)}

    result: dict[str, Any] = {
        "lottery_type": lottery_type,
        "lottery_label": label,
        "draw_count": analysis.draw_count,
        "top_frequent": analysis.top_frequent(),
        "top_scored": [(n, round(s, 2)) for n, s in analysis.top_scored()],
        "top_overdue": analysis.top_overdue(),
        "combinations": [c.to_dict() for c in combinations],
        "numbers": [list(c.numbers) for c in combinations],
        "success": True,
    }

    if ai_text:
        try:
            ai_sets = extract_recommendations(ai_text, config)
            result["ai_numbers"] = ai_sets
            result["cross_check"] = cross_check(ai_sets, combinations)
        except InvalidRecommendationError as exc:
            log.warning(f"AI recommendation ignored: {exc}")
            result["ai_error"] = str(exc)

    log.info(f"[RECOMMEND] {lottery_type} → {result['numbers']}")
    return result


def run_from_file(
    path: str | Path,
    seed: int | None = None,
    half: bool = False,
    ai_response_path: str | Path | None = None,
    notify: bool = False,
    lottery_type: str = "mega_645",
) -> dict[str, Any]:
    """Load a corpus file, generate, and optionally push to Telegram."""
    config = get_recommender_config(lottery_type)
    rng = random.Random(seed)

    draws = load_draws(path, config.number_range, config.pick_count)
    if half:
        draws = sample_half(draws, rng)
        log.info(f"Using a random half of the history: {len(draws)} draws")

    ai_text = None
    if ai_response_path:
        ai_text = Path(ai_response_path).read_text(encoding="utf-8")

    result = generate_recommendations(draws, config=config, rng=rng, ai_text=ai_text, lottery_type=lottery_type)
    if notify:
        result["notified"] = notify_recommendations(result)
    return result
