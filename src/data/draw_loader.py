"""
src/data/draw_loader.py
Load a historical draw corpus from local CSV / JSON / JSONL files.
Returned draws are newest-first: 6 primary numbers, optionally + bonus.
"""
from __future__ import annotations

import csv
import json
import random
import re
from pathlib import Path
from typing import Any

from src.models.statistical.draws import MalformedDrawError, validate_draws
from src.utils.logger import get_logger

log = get_logger("data.loader")

_NUMBER_RE = re.compile(r"\d+")


def _parse_numbers(raw: Any) -> list[int]:
    """Accept a list, or text such as "[1, 2, 3]" / "01 - 02 - 03" / "1 2 3"."""
    if isinstance(raw, list):
        return [int(n) for n in raw]
    return [int(n) for n in _NUMBER_RE.findall(str(raw))]


def _record(draw_id: Any, draw_date: Any, numbers: list[int], bonus: Any = None) -> dict[str, Any]:
    nums = list(numbers)
    if bonus not in (None, "", "null"):
        nums.append(int(bonus))
    return {"draw_id": str(draw_id) if draw_id not in (None, "") else None,
            "draw_date": draw_date or None,
            "numbers": nums}


def _draw_no(record: dict[str, Any]) -> int:
    draw_id = record["draw_id"] or ""
    return int(draw_id) if draw_id.isdigit() else 0


def _newest_first(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort by draw date then numeric draw id, descending, when those keys exist."""
    if records and all(r["draw_date"] for r in records):
        return sorted(records, key=lambda r: (r["draw_date"], _draw_no(r)), reverse=True)
    if records and all((r["draw_id"] or "").isdigit() for r in records):
        return sorted(records, key=_draw_no, reverse=True)
    return records


# ── Formats ───────────────────────────────────────────────────────

def _read_csv(path: Path) -> list[dict[str, Any]]:
    records = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            records.append(_record(
                row.get("draw_id"),
                row.get("draw_date"),
                _parse_numbers(row.get("numbers", "")),
                row.get("jackpot2"),
            ))
    return records


def _read_jsonl(path: Path) -> list[dict[str, Any]]:
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            records.append(_record(data.get("id"), data.get("date"), _parse_numbers(data.get("result", []))))
    return records


def _read_json(path: Path) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        # {"1101": ["3", "11", ...], ...}: spreadsheet export keyed by draw number
        return [_record(k, None, _parse_numbers(v)) for k, v in data.items()]
    if isinstance(data, list):
        return [_record(None, None, _parse_numbers(v)) for v in data]
    raise ValueError(f"Unsupported JSON layout in {path}")


_READERS = {
    ".csv": _read_csv,
    ".jsonl": _read_jsonl,
    ".json": _read_json,
}


def load_draws(path: str | Path, number_range: tuple[int, int] = (1, 45), pick_count: int = 6) -> list[list[int]]:
    """Read, order newest-first and validate a draw corpus file."""
    path = Path(path)
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported draw file type: {path.suffix} (expected one of {sorted(_READERS)})")
    if not path.exists():
        raise FileNotFoundError(f"Draw file not found: {path}")

    records = _newest_first(reader(path))
    draws = [r["numbers"] for r in records]
    try:
        validate_draws(draws, number_range, pick_count)
    except MalformedDrawError as exc:
        log.error(f"Invalid draw in {path}: {exc}")
        raise
    log.info(f"Loaded {len(draws)} draws from {path}")
    return draws


def sample_half(draws: list[list[int]], rng: random.Random | None = None) -> list[list[int]]:
    """Random half of the corpus, keeping newest-first order."""
    rng = rng or random.Random()
    half = len(draws) // 2
    keep = sorted(rng.sample(range(len(draws)), half))
    return [draws[i] for i in keep]
