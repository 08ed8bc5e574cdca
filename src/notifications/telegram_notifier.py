"""
src/notifications/telegram_notifier.py
Telegram push notification of a recommendation set.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

import requests

from src.utils import config
from src.utils.logger import get_logger

log = get_logger("telegram")

TELEGRAM_API = "https://api.telegram.org"
RULE = "─" * 38


def _credentials() -> tuple[str, str] | None:
    token, chat_id = config.TELEGRAM_BOT_TOKEN, config.TELEGRAM_CHAT_ID
    if not token or not chat_id:
        return None
    return token, chat_id


def _send(text: str) -> bool:
    creds = _credentials()
    if creds is None:
        log.warning("Telegram credentials not set, recommendation not sent.")
        return False

    token, chat_id = creds
    try:
        resp = requests.post(
            f"{TELEGRAM_API}/bot{token}/sendMessage",
            json={"chat_id": chat_id, "text": text, "parse_mode": "Markdown"},
            timeout=10,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        log.error(f"Telegram send failed: {exc}")
        return False
    log.info(f"Recommendation sent to chat {chat_id}")
    return True


def _ticket(numbers: Iterable[int]) -> str:
    """Ticket layout used on the purchase slip: zero-padded, dash separated."""
    return " - ".join(map("{:02d}".format, numbers))


def format_recommendations(result: dict[str, Any]) -> str:
    lottery = result.get("lottery_label", result.get("lottery_type", "?"))
    generated = datetime.now().strftime("%d/%m/%Y %H:%M")

    if not result.get("success", True):
        return (
            f"❌ *[RECOMMEND] {lottery} — FAILED*\n"
            f"📅 {generated}\n"
            f"⚠ Reason: {result.get('error', 'Unknown error')}"
        )

    body = [f"🎲 *[RECOMMEND] {lottery}*", f"📅 {generated} | {result.get('draw_count', 0)} draws analysed", RULE]
    for idx, combo in enumerate(result.get("combinations", []), start=1):
        body.append(f"Set {idx}: `{_ticket(sorted(combo['numbers']))}` (score {combo['score']:.2f})")
    body.append(RULE)

    if "cross_check" in result:
        consensus = result["cross_check"].get("consensus", [])
        body.append(f"🤖 AI consensus: `{_ticket(consensus)}`" if consensus else "🤖 AI consensus: none")
    return "\n".join(body)


def notify_recommendations(result: dict[str, Any]) -> bool:
    return _send(format_recommendations(result))
