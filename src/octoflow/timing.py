# timing.py
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

PLACEHOLDER = "—"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as emitted by the jobs API.

    Returns None for missing or unparseable values. Naive timestamps are UTC.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def delta_ms(a: Optional[str], b: Optional[str]) -> Optional[int]:
    """
    Milliseconds from `a` to `b`, clamped at zero.

    None when either side is missing or unparseable.
    """
    start = parse_timestamp(a)
    end = parse_timestamp(b)
    if start is None or end is None:
        return None
    diff = (end - start).total_seconds() * 1000
    return max(0, int(round(diff)))


def format_duration(ms: Optional[float]) -> str:
    if ms is None:
        return PLACEHOLDER
    # round half up
    total_seconds = int(math.floor(ms / 1000 + 0.5))
    minutes, seconds = divmod(total_seconds, 60)
    if minutes <= 0:
        return f"{seconds}s"
    return f"{minutes}m {seconds}s"


def format_timestamp(value: Optional[str]) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T10:00:00.000Z"""
    dt = parse_timestamp(value)
    if dt is None:
        return PLACEHOLDER
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
