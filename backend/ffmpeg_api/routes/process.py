"""
Process Endpoint: one declarative ffmpeg job per request.

POST /v1/process:
1. Allocate a job workspace
2. Materialize inputs into it (concurrently)
3. Run the ffmpeg command steps (sequentially)
4. Stream the first output, or collect all outputs into a result map

The workspace is removed on every exit path. In streaming mode removal
is deferred until the response body has been sent.

Error mapping:
- Input resolution failure → 400 (names the input)
- Command failure → 500 with the failing step's stderr lines
- Workspace creation or result collection failure → 500
"""

import logging
import time
from contextlib import ExitStack
from typing import Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, Response

from ..execution.errors import CommandExecutionError
from ..execution.pipeline import run_commands
from ..jobs.errors import InputResolutionError, ResultCollectionError, WorkspaceError
from ..jobs.inputs import materialize_inputs
from ..jobs.models import ProcessRequest, ProcessResponse
from ..jobs.results import collect_results, find_stream_candidate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["process"])


class WorkspaceFileResponse(FileResponse):
    """
    FileResponse that owns the job workspace.
    
    The workspace is released once the body has been sent, or when
    sending stops early (client disconnect, cancellation). Removal runs
    in the worker thread pool, off the event loop.
    """
    
    def __init__(self, path, release: Callable[[], None], **kwargs):
        super().__init__(path, **kwargs)
        self._release = release
    
    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await run_in_threadpool(self._release)


def _error_detail(error: str, exc: Exception, **extra) -> dict:
    detail = {"error": error, "message": str(exc)}
    detail.update(extra)
    return detail


@router.post("/process", response_model=ProcessResponse, response_model_exclude_none=True)
def process(job: ProcessRequest, request: Request):
    """
    Run one job and deliver its outputs.
    
    Declared as a plain function so FastAPI runs it in its worker thread
    pool; independent requests proceed in parallel, each in its own
    workspace.
    
    Returns:
        ProcessResponse in batch mode, or the raw bytes of the first
        produced file in streaming mode
        
    Raises:
        HTTPException 400: If an input cannot be materialized
        HTTPException 500: If the workspace, a command step, or result
            collection fails
    """
    started = time.monotonic()
    state = request.app.state
    
    with ExitStack() as stack:
        try:
            workspace = stack.enter_context(state.workspace_manager.job_workspace())
        except WorkspaceError as e:
            logger.error(f"Workspace creation failed: {e}")
            raise HTTPException(status_code=500, detail=_error_detail("WorkspaceError", e))
        
        logger.info(f"Job started: {workspace}")
        
        gateway = state.gateway_factory(job.s3_config)
        
        try:
            materialize_inputs(gateway, job.inputs, workspace, http_timeout=state.settings.http_timeout_seconds)
        except InputResolutionError as e:
            logger.warning(f"Input fetch failed: {e}")
            raise HTTPException(
                status_code=400,
                detail=_error_detail("InputResolutionError", e, input=e.input_name),
            )
        
        try:
            run_commands(job.commands, workspace, state.command_runner)
        except CommandExecutionError as e:
            logger.error(f"ffmpeg execution failed: {e}")
            for line in e.console_lines:
                logger.error(f"ffmpeg: {line}")
            raise HTTPException(
                status_code=500,
                detail=_error_detail("CommandExecutionError", e, step=e.step, console=e.console_lines),
            )
        
        input_names = set(job.inputs)
        
        if job.output.streaming:
            path = find_stream_candidate(workspace, input_names)
            if path is None:
                logger.warning(f"Streaming requested but no output file found in {workspace}")
                return Response(status_code=200)
            
            logger.info(f"Streaming file: {path.name}")
            return WorkspaceFileResponse(
                path,
                release=stack.pop_all().close,
                media_type=job.output.inline_content_type,
            )
        
        try:
            results = collect_results(gateway, job.output, workspace, input_names)
        except ResultCollectionError as e:
            logger.error(f"Result collection failed: {e}")
            raise HTTPException(status_code=500, detail=_error_detail(type(e).__name__, e, output=e.name))
        
        logger.info(f"Job finished in {time.monotonic() - started:.3f}s ({len(results)} outputs)")
        return ProcessResponse(results=results)
