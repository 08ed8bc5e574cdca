"""
src/utils/config.py
Load env vars and the recommender config JSON.
"""
import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = ROOT / "config"

# ── Telegram ──────────────────────────────────────────────────────
# Empty values disable notifications.
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID: str = os.getenv("TELEGRAM_CHAT_ID", "")

# ── Inputs ────────────────────────────────────────────────────────
DRAWS_FILE: str = os.getenv("DRAWS_FILE", "data/mega_645.jsonl")
AI_RESPONSE_FILE: str = os.getenv("AI_RESPONSE_FILE", "")
LOTTO_CALCULATE_PROMPT: str = os.getenv("LOTTO_CALCULATE_PROMPT", "")

# ── Lottery types ─────────────────────────────────────────────────
RECOMMENDER_CONFIG_FILES: dict[str, str] = {
    "mega_645": "recommender_645.json",
}

LOTTERY_LABELS: dict[str, str] = {
    "mega_645": "Lotto 6/45",
}

# Integer settings that may be overridden from the environment.
_ENV_OVERRIDES: dict[str, str] = {
    "recent_window": "RECENT_WINDOW",
    "trials_per_slot": "TRIALS_PER_SLOT",
    "combination_count": "COMBINATION_COUNT",
}


def _default_bands() -> dict[str, tuple[int, int]]:
    return {"low": (1, 15), "mid": (16, 30), "high": (31, 45)}


@dataclass(frozen=True)
class RecommenderConfig:
    """
    Tunables for the score model and the combination generator.

    Defaults reproduce the production heuristic: a 50-draw recency window
    blended 0.3 (all-time) / 0.7 (recent), 100 sampling trials per slot and
    5 recommended sets of 6 numbers from 1..45.
    """

    number_range: tuple[int, int] = (1, 45)
    pick_count: int = 6

    # Score model
    recent_window: int = 50
    total_weight: float = 0.3
    recent_weight: float = 0.7
    frequency_scale: float = 50.0
    gap_scale: float = 30.0
    baseline: float = 20.0

    # Generator
    trials_per_slot: int = 100
    combination_count: int = 5
    excluded_per_slot: int = 2

    # Combination heuristics
    ideal_gap: float = 7.5
    gap_ceiling: float = 20.0
    score_sum_divisor: float = 10.0
    even_range: tuple[int, int] = (2, 4)
    parity_points: float = 20.0
    bands: dict[str, tuple[int, int]] = field(default_factory=_default_bands)
    band_points: float = 20.0
    max_consecutive_pairs: int = 2
    consecutive_points: float = 10.0

    def __post_init__(self) -> None:
        lo, hi = self.number_range
        if lo > hi:
            raise ValueError(f"Invalid number_range: {self.number_range}")
        if self.pick_count < 2 or self.pick_count > hi - lo + 1:
            raise ValueError(f"pick_count {self.pick_count} does not fit range {self.number_range}")
        if self.recent_window < 1:
            raise ValueError(f"recent_window must be >= 1, got {self.recent_window}")
        if self.trials_per_slot < 1:
            raise ValueError(f"trials_per_slot must be >= 1, got {self.trials_per_slot}")
        if self.combination_count < 1:
            raise ValueError(f"combination_count must be >= 1, got {self.combination_count}")
        if self.score_sum_divisor == 0:
            raise ValueError("score_sum_divisor must be non-zero")

    @property
    def numbers(self) -> range:
        lo, hi = self.number_range
        return range(lo, hi + 1)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecommenderConfig":
        """Build a config from a JSON mapping. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {k: v for k, v in data.items() if k in known}
        for key in ("number_range", "even_range"):
            if key in kwargs:
                kwargs[key] = tuple(kwargs[key])
        if "bands" in kwargs:
            kwargs["bands"] = {zone: tuple(bounds) for zone, bounds in kwargs["bands"].items()}
        return cls(**kwargs)


_config_cache: dict[str, RecommenderConfig] = {}


def get_model_config(lottery_type: str = "mega_645") -> dict[str, Any]:
    """Load the raw config JSON for a given lottery type."""
    filename = RECOMMENDER_CONFIG_FILES.get(lottery_type)
    if not filename:
        raise ValueError(f"Unknown lottery type: {lottery_type}")
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_recommender_config(lottery_type: str = "mega_645") -> RecommenderConfig:
    """Load and cache the recommender config, applying env overrides."""
    if lottery_type in _config_cache:
        return _config_cache[lottery_type]
    data = get_model_config(lottery_type)
    for key, env_name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw:
            data[key] = int(raw)
    config = RecommenderConfig.from_dict(data)
    _config_cache[lottery_type] = config
    return config
