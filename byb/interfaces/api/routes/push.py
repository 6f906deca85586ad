"""Endpoints for push subscriptions, scheduled reminders and their dispatch."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from byb.application.use_cases.push import (
    dispatch_due_notifications,
    register_push_subscription,
    schedule_notification,
)
from byb.config import get_settings
from byb.domain.entities import ScheduledNotification
from byb.infrastructure.database import get_db
from byb.infrastructure.push import PushSender
from byb.interfaces.api.dependencies import get_push_sender, verify_dispatch_token
from byb.interfaces.api.schemas import (
    DispatchRead,
    PushConfigRead,
    PushSubscribeRequest,
    ScheduledNotificationCreate,
    ScheduledNotificationRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/push", tags=["push"])


def _to_read_model(notification: ScheduledNotification) -> ScheduledNotificationRead:
    return ScheduledNotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        fire_at=notification.fire_at,
        payload=notification.payload,
        status=notification.status,
        attempts=notification.attempts,
        sent_at=notification.sent_at,
    )


@router.api_route(
    "/dispatch",
    methods=["GET", "POST"],
    response_model=DispatchRead,
    dependencies=[Depends(verify_dispatch_token)],
)
def dispatch(
    db: Session = Depends(get_db),
    sender: PushSender = Depends(get_push_sender),
):
    """Deliver every due reminder; meant to be called by a scheduler."""

    try:
        result = dispatch_due_notifications(db, sender=sender)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Push dispatch failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    return DispatchRead(sent=result.sent)


@router.post("/subscribe")
def subscribe(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    """Store (or refresh) the caller's browser subscription keyed on its endpoint."""

    try:
        request = PushSubscribeRequest.model_validate(payload)
    except ValidationError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Bad payload"}
        )

    try:
        register_push_subscription(
            db,
            user_id=request.user_id,
            endpoint=request.subscription.endpoint,
            p256dh=request.subscription.keys.p256dh,
            auth=request.subscription.keys.auth,
            tz=request.tz,
            platform=request.platform,
            ua=request.ua,
        )
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Bad payload"}
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Could not store push subscription")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    return {"ok": True}


@router.get("/config", response_model=PushConfigRead)
def push_config() -> PushConfigRead:
    """Expose the VAPID public key browsers need to subscribe."""

    settings = get_settings()
    return PushConfigRead(
        enabled=settings.push_enabled,
        public_key=settings.vapid_public_key if settings.push_enabled else None,
    )


@router.post(
    "/notifications",
    response_model=ScheduledNotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_scheduled_notification(
    notification_in: ScheduledNotificationCreate,
    db: Session = Depends(get_db),
) -> ScheduledNotificationRead:
    """Schedule a reminder for later delivery by the dispatcher."""

    try:
        notification = schedule_notification(
            db,
            user_id=notification_in.user_id,
            fire_at=notification_in.fire_at,
            payload=notification_in.payload_dict(),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(notification)
