"""tests/test_pipeline.py"""
import json
import random
from unittest.mock import MagicMock, patch

import requests

from src.notifications import telegram_notifier
from src.pipeline.recommendation_generator import generate_recommendations, run_from_file
from src.utils.config import RecommenderConfig

HISTORY_645 = [
    [5, 14, 22, 33, 41, 45, 7],
    [3, 11, 19, 28, 37, 40],
    [7, 14, 24, 35, 43, 44],
    [2, 9, 22, 30, 41, 42],
    [8, 17, 25, 36, 39, 45],
]

AI_TEXT = json.dumps([
    [3, 11, 19, 28, 37, 40],
    [5, 14, 22, 33, 41, 45],
    [1, 8, 16, 24, 32, 44],
    [2, 9, 17, 26, 35, 43],
    [6, 13, 21, 29, 38, 42],
])


class TestGenerateRecommendations:
    def test_successful_generation(self):
        result = generate_recommendations(HISTORY_645, config=RecommenderConfig(), rng=random.Random(1))
        assert result["success"] is True
        assert result["draw_count"] == 5
        assert len(result["numbers"]) == 5
        assert all(len(set(nums)) == 6 for nums in result["numbers"])
        assert [c["numbers"] for c in result["combinations"]] == result["numbers"]
        assert len(result["top_frequent"]) == 10
        assert "cross_check" not in result

    def test_malformed_history_returns_error(self):
        result = generate_recommendations([[1, 2, 3]], config=RecommenderConfig())
        assert result["success"] is False
        assert "Draw #0" in result["error"]

    def test_empty_history(self):
        result = generate_recommendations([], config=RecommenderConfig(), rng=random.Random(2))
        assert result["success"] is True
        assert len(result["numbers"]) == 5

    def test_with_ai_response(self):
        result = generate_recommendations(
            HISTORY_645, config=RecommenderConfig(), rng=random.Random(3), ai_text=AI_TEXT
        )
        assert len(result["ai_numbers"]) == 5
        assert len(result["cross_check"]["slots"]) == 5

    def test_bad_ai_response_is_ignored(self):
        result = generate_recommendations(
            HISTORY_645, config=RecommenderConfig(), rng=random.Random(3), ai_text="no numbers today"
        )
        assert result["success"] is True
        assert "ai_error" in result
        assert "cross_check" not in result

    def test_loads_default_config(self):
        result = generate_recommendations(HISTORY_645, rng=random.Random(4))
        assert result["lottery_label"] == "Lotto 6/45"


class TestRunFromFile:
    def setup_method(self):
        self.history = HISTORY_645 * 4

    def _write(self, tmp_path):
        path = tmp_path / "draws.json"
        path.write_text(json.dumps(self.history), encoding="utf-8")
        return path

    @patch("src.pipeline.recommendation_generator.notify_recommendations")
    def test_seeded_run_is_reproducible(self, mock_notify, tmp_path):
        path = self._write(tmp_path)
        a = run_from_file(path, seed=7)
        b = run_from_file(path, seed=7)
        assert a["numbers"] == b["numbers"]
        mock_notify.assert_not_called()

    @patch("src.pipeline.recommendation_generator.notify_recommendations")
    def test_notify(self, mock_notify, tmp_path):
        mock_notify.return_value = True
        result = run_from_file(self._write(tmp_path), seed=1, notify=True)
        assert result["notified"] is True
        mock_notify.assert_called_once_with(result)

    def test_half_history(self, tmp_path):
        result = run_from_file(self._write(tmp_path), seed=1, half=True)
        assert result["draw_count"] == len(self.history) // 2

    def test_ai_response_file(self, tmp_path):
        ai_path = tmp_path / "ai.txt"
        ai_path.write_text(f"Recommendation: {AI_TEXT}", encoding="utf-8")
        result = run_from_file(self._write(tmp_path), seed=1, ai_response_path=ai_path)
        assert "cross_check" in result


class TestTelegramNotifier:
    RESULT = {
        "lottery_label": "Lotto 6/45",
        "draw_count": 1100,
        "combinations": [{"numbers": [3, 11, 19, 28, 37, 40], "score": 97.4}],
        "cross_check": {"consensus": [11, 28]},
        "success": True,
    }

    def test_format_success(self):
        msg = telegram_notifier.format_recommendations(self.RESULT)
        assert "Set 1: `03 - 11 - 19 - 28 - 37 - 40` (score 97.40)" in msg
        assert "AI consensus: `11 - 28`" in msg
        assert "1100 draws" in msg

    def test_format_failure(self):
        msg = telegram_notifier.format_recommendations({"success": False, "error": "boom"})
        assert "FAILED" in msg
        assert "boom" in msg

    def test_format_consensus_keeps_rank_order(self):
        result = dict(self.RESULT, cross_check={"consensus": [28, 11]})
        assert "AI consensus: `28 - 11`" in telegram_notifier.format_recommendations(result)

    def test_format_without_consensus(self):
        result = dict(self.RESULT, cross_check={"consensus": []})
        assert "AI consensus: none" in telegram_notifier.format_recommendations(result)
        no_ai = {k: v for k, v in self.RESULT.items() if k != "cross_check"}
        assert "AI consensus" not in telegram_notifier.format_recommendations(no_ai)

    @patch("src.notifications.telegram_notifier.requests.post")
    def test_skips_without_credentials(self, mock_post, monkeypatch):
        monkeypatch.setattr("src.utils.config.TELEGRAM_BOT_TOKEN", "")
        assert telegram_notifier.notify_recommendations(self.RESULT) is False
        mock_post.assert_not_called()

    @patch("src.notifications.telegram_notifier.requests.post")
    def test_sends_markdown(self, mock_post, monkeypatch):
        monkeypatch.setattr("src.utils.config.TELEGRAM_BOT_TOKEN", "token")
        monkeypatch.setattr("src.utils.config.TELEGRAM_CHAT_ID", "chat")
        mock_post.return_value = MagicMock()
        assert telegram_notifier.notify_recommendations(self.RESULT) is True
        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs["json"]
        assert url.endswith("/bottoken/sendMessage")
        assert payload["chat_id"] == "chat"
        assert payload["parse_mode"] == "Markdown"

    @patch("src.notifications.telegram_notifier.requests.post")
    def test_http_error_returns_false(self, mock_post, monkeypatch):
        monkeypatch.setattr("src.utils.config.TELEGRAM_BOT_TOKEN", "token")
        monkeypatch.setattr("src.utils.config.TELEGRAM_CHAT_ID", "chat")
        mock_post.side_effect = requests.ConnectionError("down")
        assert telegram_notifier.notify_recommendations(self.RESULT) is False
