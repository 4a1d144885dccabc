"""
Command execution for job pipelines.

ffmpeg is the only tool; it is reached through the CommandRunner
interface so it can be replaced in tests.
"""

from .errors import ExecutionError, CommandExecutionError
from .base import CommandOutcome, CommandRunner, split_console
from .ffmpeg import FFmpegRunner, HIDE_BANNER, find_ffmpeg, sanitize_args
from .pipeline import run_commands

__all__ = [
    # Errors
    "ExecutionError",
    "CommandExecutionError",
    # Runner interface
    "CommandOutcome",
    "CommandRunner",
    "split_console",
    # FFmpeg
    "FFmpegRunner",
    "HIDE_BANNER",
    "find_ffmpeg",
    "sanitize_args",
    # Pipeline
    "run_commands",
]
