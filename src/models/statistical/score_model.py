"""
src/models/statistical/score_model.py
Composite desirability score per number: frequency blend + gap + baseline.
"""
from __future__ import annotations

from typing import Sequence

from src.models.statistical.draws import Draw, validate_draws
from src.models.statistical.frequency_analyzer import FrequencyAnalyzer
from src.models.statistical.gap_analyzer import GapAnalyzer
from src.models.types import NumberScore, ScoreAnalysis
from src.utils.config import RecommenderConfig
from src.utils.logger import get_logger

log = get_logger("model.score")


class ScoreModel:
    """
    Turns the draw history (newest-first) into a final score per number:

        final(n) = weighted(n) * frequency_scale
                   + (last_seen(n) / len(draws)) * gap_scale
                   + baseline

    The first term rewards numbers that are frequent overall and recently,
    the second rewards numbers that have been absent for a long time, and
    the baseline keeps every number selectable.
    """

    def __init__(self, config: RecommenderConfig | None = None, validate: bool = True):
        self.config = config or RecommenderConfig()
        self.validate = validate
        self.freq_analyzer = FrequencyAnalyzer(
            number_range=self.config.number_range,
            window=self.config.recent_window,
            weight_total=self.config.total_weight,
            weight_recent=self.config.recent_weight,
            pick_count=self.config.pick_count,
        )
        self.gap_analyzer = GapAnalyzer(
            number_range=self.config.number_range,
            pick_count=self.config.pick_count,
        )

    def _check(self, draws: Sequence[Draw]) -> None:
        if self.validate:
            validate_draws(draws, self.config.number_range, self.config.pick_count)

    def compute_frequency(self, draws: Sequence[Draw]) -> NumberScore:
        self._check(draws)
        return self.freq_analyzer.get_frequency(draws)

    def compute_weighted_score(self, draws: Sequence[Draw]) -> NumberScore:
        self._check(draws)
        return self._weighted(draws)

    def compute_final_score(self, draws: Sequence[Draw]) -> NumberScore:
        self._check(draws)
        return self._final(draws, self._weighted(draws))

    def _weighted(self, draws: Sequence[Draw]) -> NumberScore:
        if not draws:
            return {n: float(self.config.baseline) for n in self.config.numbers}
        return self.freq_analyzer.get_weighted_scores(draws)

    def _final(self, draws: Sequence[Draw], weighted: NumberScore) -> NumberScore:
        cfg = self.config
        if not draws:
            log.warning("Empty draw history — every number gets the baseline score.")
            return {n: float(cfg.baseline) for n in cfg.numbers}

        gap_scores = self.gap_analyzer.get_scores(draws)
        return {
            n: weighted[n] * cfg.frequency_scale + gap_scores[n] * cfg.gap_scale + cfg.baseline
            for n in cfg.numbers
        }

    def analyze(self, draws: Sequence[Draw]) -> ScoreAnalysis:
        """Compute every per-number statistic in one pass over validation."""
        self._check(draws)
        weighted = self._weighted(draws)
        analysis = ScoreAnalysis(
            frequency=self.freq_analyzer.get_frequency(draws),
            weighted=weighted,
            final=self._final(draws, weighted),
            last_seen=self.gap_analyzer.get_gaps(draws),
            draw_count=len(draws),
        )
        log.info(f"Scored {len(draws)} draws — top numbers: {[n for n, _ in analysis.top_scored(6)]}")
        return analysis
