# tests/helpers.py

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

NOW = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


def write_items(path: Path, items: list[dict[str, Any]]) -> None:
    """Write a task file by hand, the way a user editing it would."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"items": items}, indent=2), encoding="utf-8")


def item(
    text: str,
    complete: bool = False,
    complete_date: str | None = None,
    repeat_days: int | None = None,
) -> dict[str, Any]:
    return {
        "text": text,
        "complete": complete,
        "complete_date": complete_date,
        "repeat_days": repeat_days,
    }
