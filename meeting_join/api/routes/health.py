# meeting_join/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from meeting_join.core.config import get_settings


router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Response schema for the health check endpoint.
    """

    status: str = Field(..., description="Overall service status.", examples=["ok"])
    app_name: str = Field(..., description="Configured application name.", examples=["Meeting Join Service"])
    environment: str = Field(..., description="Deployment environment.", examples=["local"])
    timestamp_utc: datetime = Field(
        ...,
        description="Server time (UTC) at which the check ran.",
        examples=["2026-01-13T16:00:00Z"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check for the meeting join service",
    description=(
        "Liveness probe. Touches no downstream system, so it keeps "
        "answering even when meeting data sources are unavailable."
    ),
    responses={
        200: {
            "description": "Service is up.",
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "app_name": "Meeting Join Service",
                        "environment": "local",
                        "timestamp_utc": "2026-01-13T16:00:00Z",
                    }
                }
            },
        }
    },
)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
