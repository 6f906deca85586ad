"""SQLAlchemy model for the focus session log."""

from sqlalchemy import Column, DateTime, Integer, String

from byb.infrastructure.database import Base


class FocusSessionModel(Base):
    """Completed focus block."""

    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    started_at = Column(DateTime(), nullable=False, index=True)
    ended_at = Column(DateTime(), nullable=False)
    phase = Column(String(20), nullable=False, default="focus")
    preset = Column(String(32), nullable=False)
    minutes = Column(Integer, nullable=False)
    interruptions = Column(Integer, nullable=False, default=0)
    task_title = Column(String(200), nullable=True)


__all__ = ["FocusSessionModel"]
