from fastapi import FastAPI

from .assistant import router as assistant_router
from .focus_sessions import router as focus_sessions_router
from .push import router as push_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(assistant_router)
    app.include_router(focus_sessions_router)
    app.include_router(push_router)
