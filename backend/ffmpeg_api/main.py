"""
FFmpeg API service: declarative ffmpeg jobs over HTTP.
"""

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .execution.base import CommandRunner
from .execution.ffmpeg import FFmpegRunner, find_ffmpeg
from .jobs.workspace import WorkspaceManager
from .routes import health, process
from .storage.gateway import S3Gateway, StorageGateway
from .storage.models import S3Config
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or schema mismatch is a bad request, not 422."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid request")
        messages.append(f"{location}: {message}" if location else message)
    return JSONResponse(
        status_code=400,
        content={"detail": {"error": "RequestMalformed", "message": "; ".join(messages)}},
    )


def create_app(
    settings: Optional[Settings] = None,
    command_runner: Optional[CommandRunner] = None,
    gateway_factory: Optional[Callable[[S3Config], StorageGateway]] = None,
) -> FastAPI:
    """
    Build the FastAPI application.
    
    Args:
        settings: Service settings (defaults to environment)
        command_runner: Process runner (defaults to ffmpeg)
        gateway_factory: Builds a storage gateway from a request's s3Config
        
    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    
    app = FastAPI(title="FFmpeg API", version=__version__)
    
    if command_runner is None:
        binary = find_ffmpeg(settings.ffmpeg_binary)
        if binary is None:
            logger.warning(f"ffmpeg not found ({settings.ffmpeg_binary}); commands will fail until it is installed")
            binary = settings.ffmpeg_binary
        command_runner = FFmpegRunner(binary)
    
    app.state.settings = settings
    app.state.workspace_manager = WorkspaceManager(settings.temp_root)
    app.state.command_runner = command_runner
    app.state.gateway_factory = gateway_factory or S3Gateway.from_config
    
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    
    app.include_router(health.router)
    app.include_router(process.router)
    
    logger.info(f"Job workspaces under {settings.temp_root}")
    return app


app = create_app()
