"""Health check endpoint for liveness probes."""
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from content_api.config import APP_VERSION

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
        version: Application version string.
    """

    status: Literal["alive"]
    version: str


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    The search engine holds no external connections, so a running process
    is a healthy one.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive", version=APP_VERSION)
