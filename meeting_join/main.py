# meeting_join/main.py
import logging

from fastapi import FastAPI

from meeting_join.api.routes import health, meetings, recurrence
from meeting_join.core.config import get_settings


def create_app() -> FastAPI:
    """
    Application factory for the Meeting Join service.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Decides which occurrence of a meeting is current, whether it can be\n"
            "joined right now, and how recurrence choices map to provider rules."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(meetings.router)
    app.include_router(recurrence.router)

    return app


app = create_app()
