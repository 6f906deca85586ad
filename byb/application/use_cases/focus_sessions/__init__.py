"""Use cases for the focus session log."""

from .log_focus_session import log_completed_block, log_focus_session
from .summarize_focus_minutes import summarize_focus_minutes

__all__ = ["log_completed_block", "log_focus_session", "summarize_focus_minutes"]
