"""
FFmpeg command runner.

Design rules:
- One subprocess per command step
- Working directory is the job workspace
- stdout discarded, stderr captured in full (not streamed)
- Non-zero exit = failure
- Caller arguments are passed through untouched apart from -hide_banner
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .base import CommandOutcome, CommandRunner, split_console

logger = logging.getLogger(__name__)

HIDE_BANNER = "-hide_banner"

# Common install locations, checked after PATH
COMMON_FFMPEG_PATHS = [
    "/usr/local/bin/ffmpeg",
    "/usr/bin/ffmpeg",
    "/opt/homebrew/bin/ffmpeg",
]


def find_ffmpeg(binary: str = "ffmpeg") -> Optional[str]:
    """
    Find the ffmpeg binary.
    
    Checks the configured binary (absolute path or name on PATH) first,
    then common install locations.
    
    Returns:
        Absolute path to ffmpeg, or None if not found
    """
    if os.path.isabs(binary):
        if os.path.isfile(binary) and os.access(binary, os.X_OK):
            return binary
        return None
    
    found = shutil.which(binary)
    if found:
        return found
    
    if binary != "ffmpeg":
        return None
    
    for path in COMMON_FFMPEG_PATHS:
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path
    
    return None


def sanitize_args(args: List[str]) -> List[str]:
    """
    Put -hide_banner first, exactly once.
    
    Every caller-supplied -hide_banner is removed; everything else keeps
    its order.
    """
    return [HIDE_BANNER] + [arg for arg in args if arg != HIDE_BANNER]


class FFmpegRunner(CommandRunner):
    """Runs ffmpeg via subprocess.run."""
    
    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary
    
    @property
    def name(self) -> str:
        return "ffmpeg"
    
    def run(self, args: List[str], cwd: Path) -> CommandOutcome:
        cmd = [self.binary] + list(args)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            logger.error(f"[FFmpeg] Failed to start {self.binary}: {e}")
            return CommandOutcome(ok=False, exit_code=None, stderr_lines=[str(e)])
        
        if result.returncode != 0:
            return CommandOutcome(
                ok=False,
                exit_code=result.returncode,
                stderr_lines=split_console(result.stderr),
            )
        
        return CommandOutcome(ok=True, exit_code=0)
