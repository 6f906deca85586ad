"""Use case delivering due scheduled notifications to every device of the recipient."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from byb.config import Settings, get_settings
from byb.domain.entities import ScheduledNotification
from byb.infrastructure.push import PushDeliveryError, PushGoneError, PushSender
from byb.infrastructure.repositories import (
    PushSubscriptionRepository,
    ScheduledNotificationRepository,
)
from byb.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Counters describing a dispatcher run. ``sent`` counts successful pushes."""

    sent: int = 0
    processed: int = 0
    skipped: int = 0
    deferred: int = 0
    failed: int = 0
    pruned: int = 0


def dispatch_due_notifications(
    session: Session,
    *,
    sender: PushSender,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> DispatchResult:
    """Send every pending notification whose fire time has passed.

    Notifications are handled one at a time, and within each one the
    recipient's subscriptions are tried one at a time. Each notification is
    claimed before sending so overlapping runs never deliver it twice.
    Endpoints reported gone (404/410) are deleted; other delivery errors are
    logged and ignored. Once all subscriptions were tried the notification is
    marked ``sent`` whatever the individual outcomes.

    A recipient without subscriptions keeps the notification ``pending`` until
    ``push_missing_subscription_attempts`` runs have found none, then it is
    marked ``failed``.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: when the due batch cannot be queried.
    """

    settings = settings or get_settings()
    now = now or now_utc()
    stale_claim_before = now - timedelta(seconds=settings.push_claim_timeout_seconds)

    notifications = ScheduledNotificationRepository(session)
    subscriptions = PushSubscriptionRepository(session)

    due = notifications.due_before(
        now,
        limit=settings.push_dispatch_batch_size,
        stale_claim_before=stale_claim_before,
    )
    result = DispatchResult()
    if not due:
        return result

    for notification in due:
        if notification.id is None:  # pragma: no cover - rows always carry ids
            continue
        if not notifications.claim(
            notification.id, now=now, stale_claim_before=stale_claim_before
        ):
            result.skipped += 1
            logger.debug("Notification %s already claimed by another run", notification.id)
            continue

        result.processed += 1
        targets = subscriptions.by_user(notification.user_id)
        if not targets:
            _settle_without_subscriptions(notifications, notification, settings, result)
            continue

        for subscription in targets:
            try:
                sender.send(subscription, notification.payload)
            except PushGoneError:
                logger.info(
                    "Removing expired push subscription %s for user %s",
                    subscription.endpoint[:60],
                    notification.user_id,
                )
                subscriptions.delete(subscription.endpoint)
                result.pruned += 1
            except PushDeliveryError as exc:
                logger.warning(
                    "Push delivery failed for notification %s to %s: %s",
                    notification.id,
                    subscription.endpoint[:60],
                    exc,
                )
            else:
                result.sent += 1

        notifications.mark_sent(notification.id, sent_at=now)

    logger.info(
        "Push dispatch finished: sent=%d processed=%d skipped=%d deferred=%d failed=%d pruned=%d",
        result.sent,
        result.processed,
        result.skipped,
        result.deferred,
        result.failed,
        result.pruned,
    )
    return result


def _settle_without_subscriptions(
    repository: ScheduledNotificationRepository,
    notification: ScheduledNotification,
    settings: Settings,
    result: DispatchResult,
) -> None:
    attempts = notification.attempts + 1
    if attempts >= settings.push_missing_subscription_attempts:
        repository.mark_failed(notification.id, attempts=attempts)  # type: ignore[arg-type]
        result.failed += 1
        logger.info(
            "Notification %s failed: user %s has no push subscriptions after %d attempts",
            notification.id,
            notification.user_id,
            attempts,
        )
        return
    repository.release(notification.id, attempts=attempts)  # type: ignore[arg-type]
    result.deferred += 1


__all__ = ["DispatchResult", "dispatch_due_notifications"]
