"""
Input Materializer.

Resolves every named input of a request into workspace/<name>, one
thread per input.

Resolution order per input (first non-empty wins):
1. s3        → fetched through the storage gateway
2. http      → plain GET, body written to disk
3. base64    → decoded and written
4. temporary → nothing written
5. none set  → "input source missing"

FAILURE SEMANTICS:
- Every fetch runs to completion, even after a sibling has failed
- Only the first observed failure is raised; later ones are dropped
- The raised error names the offending input

The pool is sized to the number of inputs with no cap, so a request with a
very large input map starts that many threads at once.
"""

import base64
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Optional

import requests

from ..storage.errors import StorageError
from ..storage.gateway import StorageGateway
from .errors import InputResolutionError, MissingInputSourceError
from .models import Input, InputSource

logger = logging.getLogger(__name__)

HTTP_CHUNK_SIZE = 1024 * 1024


def download_from_http(url: str, dst: Path, timeout: Optional[float] = None) -> None:
    """Stream the body of a GET request into dst. Non-2xx responses raise."""
    with requests.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        with open(dst, "wb") as fh:
            for chunk in response.iter_content(chunk_size=HTTP_CHUNK_SIZE):
                fh.write(chunk)


def write_base64_to_file(payload: str, dst: Path) -> None:
    # Line-wrapped payloads (76-column encoders) are accepted.
    payload = payload.replace("\r", "").replace("\n", "")
    data = base64.b64decode(payload, validate=True)
    dst.write_bytes(data)


def fetch_input(
    gateway: StorageGateway,
    name: str,
    spec: Input,
    dst: Path,
    http_timeout: Optional[float] = None,
) -> None:
    """
    Materialize a single input at dst.
    
    Raises:
        MissingInputSourceError: If no selector is set
        InputResolutionError: If the fetch, download, decode or write fails
    """
    source = spec.source
    if source is None:
        raise MissingInputSourceError(name)
    
    logger.info(f"Fetching input: {name} ({source.value})")
    
    try:
        if source == InputSource.S3:
            dst.write_bytes(gateway.get(spec.s3))
        elif source == InputSource.HTTP:
            download_from_http(spec.http, dst, timeout=http_timeout)
        elif source == InputSource.BASE64:
            write_base64_to_file(spec.base64, dst)
    except (StorageError, requests.RequestException, ValueError, OSError) as e:
        raise InputResolutionError(name, str(e)) from e


def materialize_inputs(
    gateway: StorageGateway,
    inputs: Dict[str, Input],
    workspace: Path,
    http_timeout: Optional[float] = None,
) -> None:
    """
    Resolve all inputs into workspace concurrently.
    
    Args:
        gateway: Storage gateway for s3 inputs
        inputs: Input name -> descriptor
        workspace: Job directory; each input lands at workspace/<name>
        http_timeout: Optional timeout for HTTP inputs (None waits forever)
        
    Raises:
        InputResolutionError: The first failure observed across all inputs
    """
    if not inputs:
        return
    
    first_error: Optional[InputResolutionError] = None
    
    with ThreadPoolExecutor(max_workers=len(inputs), thread_name_prefix="input_fetch") as executor:
        futures = {
            executor.submit(fetch_input, gateway, name, spec, workspace / name, http_timeout): name
            for name, spec in inputs.items()
        }
        
        # Barrier: as_completed drains every future before the pool shuts down
        for future in as_completed(futures):
            try:
                future.result()
            except InputResolutionError as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.debug(f"Dropping additional input failure: {e}")
    
    if first_error is not None:
        raise first_error
