"""
Job Workspace Manager.

Every request gets its own directory under a shared temp root, named with
a fresh UUID4. Inputs are written into it, ffmpeg runs inside it, and
outputs are collected from it.

Design rules:
- A workspace is never reused across requests
- Creation failure is fatal to the request
- Release removes the whole tree on every exit path
- Removal failure is logged, never surfaced to the caller
"""

import logging
import shutil
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Tuple, Union

from .errors import WorkspaceError

logger = logging.getLogger(__name__)


class WorkspaceManager:
    """
    Allocates and removes per-job directories under temp_root.
    
    temp_root is process state set once at startup. Concurrent acquire()
    calls never collide because each directory name is a new UUID4 and
    creation refuses existing paths.
    """
    
    def __init__(self, temp_root: Union[str, Path]):
        self.temp_root = Path(temp_root)
    
    def acquire(self) -> Tuple[Path, Callable[[], None]]:
        """
        Create a new job directory.
        
        Returns:
            Tuple of (workspace path, release callable)
            
        Raises:
            WorkspaceError: If the directory cannot be created
        """
        path = self.temp_root / str(uuid.uuid4())
        try:
            path.mkdir(mode=0o755, parents=True, exist_ok=False)
        except OSError as e:
            raise WorkspaceError(str(path), str(e)) from e
        
        def release() -> None:
            if not path.exists():
                return
            logger.info(f"Cleaning job dir: {path}")
            try:
                shutil.rmtree(path)
            except OSError as e:
                logger.error(f"Failed to remove job dir {path}: {e}")
        
        return path, release
    
    @contextmanager
    def job_workspace(self) -> Iterator[Path]:
        """Scoped acquire/release of a job directory."""
        path, release = self.acquire()
        try:
            yield path
        finally:
            release()
