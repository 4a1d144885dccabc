"""
Command runner abstraction.

A runner executes one external-tool invocation in a working directory
and reports whether it succeeded plus its stderr lines. The pipeline
only talks to this interface, so tests can swap in a fake executable
or an in-process fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class CommandOutcome:
    """Result of one invocation."""
    
    ok: bool
    exit_code: Optional[int] = None
    stderr_lines: List[str] = field(default_factory=list)


class CommandRunner(ABC):
    """
    Abstract process runner.
    
    Runners are stateless; all context is passed per call.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable tool name for logs."""
        pass
    
    @abstractmethod
    def run(self, args: List[str], cwd: Path) -> CommandOutcome:
        """
        Run the tool with args (binary excluded) inside cwd.
        
        Must not raise for a failed or unlaunchable process; report it
        through CommandOutcome instead.
        """
        pass


def split_console(stderr: str) -> List[str]:
    """Split captured stderr into lines, dropping the trailing newline."""
    stderr = stderr.rstrip("\n")
    if not stderr:
        return []
    return stderr.split("\n")
