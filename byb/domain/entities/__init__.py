"""Domain entities exposed by the application."""

from .chat import CHAT_ROLES, ChatMessage, ChatReply, ChatRole, Persona
from .focus_session import CompletedFocusBlock, FocusSession, FocusSummary
from .focus_timer import (
    CUSTOM_PRESET_KEY,
    DEFAULT_PRESET_KEY,
    PRESETS,
    CustomDurations,
    FocusTimerState,
    Phase,
    PhaseTransition,
    Preset,
    compute_next_phase,
    resolve_preset,
)
from .push_subscription import PushSubscription
from .scheduled_notification import (
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_PENDING,
    NOTIFICATION_STATUS_PROCESSING,
    NOTIFICATION_STATUS_SENT,
    ScheduledNotification,
)

__all__ = [
    "CHAT_ROLES",
    "ChatMessage",
    "ChatReply",
    "ChatRole",
    "Persona",
    "CompletedFocusBlock",
    "FocusSession",
    "FocusSummary",
    "CUSTOM_PRESET_KEY",
    "DEFAULT_PRESET_KEY",
    "PRESETS",
    "CustomDurations",
    "FocusTimerState",
    "Phase",
    "PhaseTransition",
    "Preset",
    "compute_next_phase",
    "resolve_preset",
    "PushSubscription",
    "NOTIFICATION_STATUS_FAILED",
    "NOTIFICATION_STATUS_PENDING",
    "NOTIFICATION_STATUS_PROCESSING",
    "NOTIFICATION_STATUS_SENT",
    "ScheduledNotification",
]
