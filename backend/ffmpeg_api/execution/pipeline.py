"""
Command Pipeline Executor.

Runs a request's command steps in declared order inside its workspace.
Step N+1 starts only after step N exits successfully, since later steps
may read files written by earlier ones. The first failure stops the
pipeline.
"""

import logging
import time
from pathlib import Path
from typing import List

from .base import CommandRunner
from .errors import CommandExecutionError
from .ffmpeg import sanitize_args

logger = logging.getLogger(__name__)


def run_commands(commands: List[List[str]], workspace: Path, runner: CommandRunner) -> None:
    """
    Execute every step sequentially.
    
    Args:
        commands: Ordered argument lists, one per invocation
        workspace: Working directory for every invocation
        runner: Process runner
        
    Raises:
        CommandExecutionError: On the first non-zero exit or launch failure,
            carrying that step's stderr lines
    """
    for i, args in enumerate(commands, 1):
        started = time.monotonic()
        sanitized = sanitize_args(args)
        logger.info(f"{runner.name} step {i}: {' '.join(sanitized)}")
        
        outcome = runner.run(sanitized, workspace)
        if not outcome.ok:
            raise CommandExecutionError(
                step=i,
                exit_code=outcome.exit_code,
                console_lines=outcome.stderr_lines,
            )
        
        logger.info(f"{runner.name} step {i} finished in {time.monotonic() - started:.3f}s")
