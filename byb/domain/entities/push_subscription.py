"""Domain entity representing a browser push subscription."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PushSubscription:
    """Web Push endpoint registered by one of the user's devices."""

    endpoint: str
    user_id: str
    p256dh: str
    auth: str
    tz: str | None = None
    platform: str | None = None
    ua: str | None = None
    created_at: datetime | None = None
    last_seen_at: datetime | None = None

    def subscription_info(self) -> dict[str, object]:
        """Return the structure expected by Web Push libraries."""

        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }


__all__ = ["PushSubscription"]
