"""
Execution-specific errors.
"""

from typing import List, Optional


class ExecutionError(Exception):
    """Base exception for command execution failures."""
    pass


class CommandExecutionError(ExecutionError):
    """
    Raised when a command step exits non-zero or cannot be launched.
    
    Carries the failing step's stderr only; earlier steps' output is
    discarded.
    """
    
    def __init__(
        self,
        step: int,
        exit_code: Optional[int] = None,
        console_lines: Optional[List[str]] = None,
    ):
        self.step = step
        self.exit_code = exit_code
        self.console_lines = console_lines or []
        
        message = f"command {step} failed"
        if exit_code is not None:
            message += f": exit status {exit_code}"
        else:
            message += ": process could not be started"
        super().__init__(message)
