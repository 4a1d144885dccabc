"""
Result Collector / Streamer.

Produced files are the workspace entries whose name is not an input name.
Entries are visited in file-name order.

Two delivery modes:
- Streaming: the first produced regular file becomes the response body
- Batch: every produced entry is uploaded and/or inlined as base64

An upload failure aborts the batch; results gathered so far are dropped.
Objects uploaded before the failure stay in the bucket.
"""

import base64
import logging
import os
from pathlib import Path
from typing import Collection, Dict, List, Optional

from ..storage.errors import StorageError
from ..storage.gateway import StorageGateway
from .errors import ResultCollectionError, ResultUploadError
from .models import OutputSpec, Result

logger = logging.getLogger(__name__)


def list_entries(workspace: Path) -> List[os.DirEntry]:
    """Workspace entries sorted by name."""
    with os.scandir(workspace) as it:
        return sorted(it, key=lambda entry: entry.name)


def find_stream_candidate(workspace: Path, input_names: Collection[str]) -> Optional[Path]:
    """
    Return the first produced regular file, or None.
    
    Directories and input-named entries are skipped.
    """
    for entry in list_entries(workspace):
        if entry.is_dir() or entry.name in input_names:
            continue
        if entry.is_file():
            return Path(entry.path)
    return None


def collect_results(
    gateway: StorageGateway,
    output: OutputSpec,
    workspace: Path,
    input_names: Collection[str],
) -> Dict[str, Result]:
    """
    Build the batch result map for every produced entry.
    
    Directories are inlined as an empty payload.
    
    Args:
        gateway: Storage gateway used when output.s3 is set
        output: Delivery options
        workspace: Job directory
        input_names: Names to exclude (every declared input, placeholders included)
        
    Returns:
        Entry name -> Result
        
    Raises:
        ResultUploadError: If any upload fails
        ResultCollectionError: If a file cannot be read for inlining
    """
    results: Dict[str, Result] = {}
    
    for entry in list_entries(workspace):
        if entry.name in input_names:
            continue
        
        logger.info(f"Collecting output: {entry.name}")
        path = Path(entry.path)
        result = Result()
        
        if output.s3:
            try:
                result.url = gateway.put(output.s3, path, entry.name)
            except StorageError as e:
                raise ResultUploadError(entry.name, str(e)) from e
        
        if output.base64 and entry.is_dir():
            result.base64 = ""
        elif output.base64:
            try:
                result.base64 = base64.b64encode(path.read_bytes()).decode("ascii")
            except OSError as e:
                raise ResultCollectionError(entry.name, str(e)) from e
        
        results[entry.name] = result
    
    return results
