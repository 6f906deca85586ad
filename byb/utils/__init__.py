"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_utc,
    ensure_utc_naive,
    from_epoch_ms,
    get_app_timezone,
    now_utc,
    start_of_day,
    start_of_week,
)

__all__ = [
    "ensure_utc",
    "ensure_utc_naive",
    "from_epoch_ms",
    "get_app_timezone",
    "now_utc",
    "start_of_day",
    "start_of_week",
]
