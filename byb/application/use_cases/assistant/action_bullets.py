"""Extraction of actionable bullet lines from assistant replies."""

from __future__ import annotations

import re
from typing import Final

MAX_ACTIONS: Final[int] = 12

_BULLET_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[-*•]\s+(.*)$")
_NUMBERED_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d+[.)]\s+(.*)$")


def extract_action_bullets(text: str, *, limit: int = MAX_ACTIONS) -> list[str]:
    """Return bullet-like lines (``-``, ``*``, ``•``, ``1.``, ``2)``) from ``text``.

    Items of two characters or less are dropped and duplicates are removed
    case-insensitively, keeping the first occurrence.
    """

    bullets: list[str] = []
    seen: set[str] = set()
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        match = _BULLET_PATTERN.match(line) or _NUMBERED_PATTERN.match(line)
        if not match:
            continue
        item = match.group(1).strip()
        if len(item) <= 2:
            continue
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        bullets.append(item)
    return bullets[:limit]
