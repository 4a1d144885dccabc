"""
FFmpeg API CLI - starts the HTTP service.

Usage:
    ffmpeg-api                         # Bind to FFMPEG_API_HOST:FFMPEG_API_PORT
    ffmpeg-api --port 9000             # Override port
    ffmpeg-api --log-level debug

Exit Codes:
    0: Server stopped cleanly
    2: Invalid arguments
"""

import argparse
from typing import List, Optional

from .config import get_settings
from .utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="ffmpeg-api",
        description="Run declarative ffmpeg jobs over HTTP",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument(
        "--log-level",
        default=settings.log_level.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    
    # First configuration wins; the app's own configure_logging() is then a no-op
    configure_logging(args.log_level)
    
    import uvicorn
    
    uvicorn.run(
        "ffmpeg_api.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    return 0
