"""
Health endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..execution.ffmpeg import find_ffmpeg

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    ffmpeg: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Liveness check.
    
    Reports the resolved ffmpeg path, or null if ffmpeg is not installed.
    The service stays up either way; commands fail per request.
    """
    settings = request.app.state.settings
    return HealthResponse(status="ok", ffmpeg=find_ffmpeg(settings.ffmpeg_binary))
