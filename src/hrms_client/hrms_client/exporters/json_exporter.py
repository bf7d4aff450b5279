from __future__ import annotations

import json

from ..analytics.model import DailySnapshot
from .base import ExportFile


def daily_snapshot_json(snapshot: DailySnapshot) -> ExportFile:
    """Pretty-printed pass-through of the daily data payload."""
    text = json.dumps(snapshot.raw, indent=2, ensure_ascii=False, default=str)
    return ExportFile(
        filename=f"daily-data-{snapshot.date}.json",
        mimetype="application/json",
        content=text.encode("utf-8"),
    )
