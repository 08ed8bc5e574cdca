"""
scripts/recommend.py
Print 5 recommended 6/45 number sets from a local draw history file.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.table import Table

from src.ai.recommendation_parser import build_messages
from src.data.draw_loader import load_draws
from src.pipeline.recommendation_generator import run_from_file
from src.utils.config import AI_RESPONSE_FILE, DRAWS_FILE
from src.utils.logger import get_logger

log = get_logger("recommend")
console = Console()


def print_analysis(result: dict) -> None:
    table = Table(title=f"Analysis — {result['draw_count']} draws")
    table.add_column("Most frequent")
    table.add_column("Top score")
    table.add_column("Longest absent")
    rows = max(len(result["top_frequent"]), len(result["top_scored"]), len(result["top_overdue"]))
    for i in range(rows):
        freq = result["top_frequent"][i] if i < len(result["top_frequent"]) else None
        scored = result["top_scored"][i] if i < len(result["top_scored"]) else None
        overdue = result["top_overdue"][i] if i < len(result["top_overdue"]) else None
        table.add_row(
            f"{freq[0]:02d} ({freq[1]}x)" if freq else "",
            f"{scored[0]:02d} ({scored[1]:.2f})" if scored else "",
            f"{overdue[0]:02d} ({overdue[1]} draws)" if overdue else "",
        )
    console.print(table)


def print_recommendations(result: dict) -> None:
    table = Table(title=f"Recommended sets — {result['lottery_label']}")
    table.add_column("#", justify="right")
    table.add_column("Numbers")
    table.add_column("Score", justify="right")
    for idx, combo in enumerate(result["combinations"], start=1):
        table.add_row(str(idx), " ".join(f"{n:02d}" for n in combo["numbers"]), f"{combo['score']:.2f}")
    console.print(table)

    cross = result.get("cross_check")
    if cross:
        console.print(f"AI consensus: {cross['consensus'] or 'none'}")
    if result.get("ai_error"):
        console.print(f"[yellow]AI response ignored: {result['ai_error']}[/yellow]")


def main():
    parser = argparse.ArgumentParser(description="Statistical lotto 6/45 recommendations")
    parser.add_argument("--draws", default=DRAWS_FILE, help="History file (.csv, .json or .jsonl)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    parser.add_argument("--half", action="store_true", help="Use a random half of the history")
    parser.add_argument("--ai-response", default=AI_RESPONSE_FILE or None, help="Saved AI response to cross-check")
    parser.add_argument("--notify", action="store_true", help="Send the sets to Telegram")
    parser.add_argument("--analysis", action="store_true", help="Also print per-number statistics")
    parser.add_argument("--prompt", action="store_true", help="Print the AI request messages as JSON and exit")
    args = parser.parse_args()

    if args.prompt:
        print(json.dumps(build_messages(load_draws(args.draws)), ensure_ascii=False, indent=2))
        return

    result = run_from_file(
        args.draws,
        seed=args.seed,
        half=args.half,
        ai_response_path=args.ai_response,
        notify=args.notify,
    )
    if not result["success"]:
        log.error(f"Recommendation failed: {result['error']}")
        sys.exit(1)

    if args.analysis:
        print_analysis(result)
    print_recommendations(result)
    # Machine-readable line for the purchase step
    print(result["numbers"])


if __name__ == "__main__":
    main()
