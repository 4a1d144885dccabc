"""
Per-request job pipeline: workspace, inputs, and result delivery.
"""

from .errors import (
    JobError,
    WorkspaceError,
    InputResolutionError,
    MissingInputSourceError,
    ResultCollectionError,
    ResultUploadError,
)
from .models import (
    InputSource,
    Input,
    OutputSpec,
    ProcessRequest,
    Result,
    ProcessResponse,
)
from .workspace import WorkspaceManager
from .inputs import materialize_inputs, fetch_input
from .results import collect_results, find_stream_candidate

__all__ = [
    # Errors
    "JobError",
    "WorkspaceError",
    "InputResolutionError",
    "MissingInputSourceError",
    "ResultCollectionError",
    "ResultUploadError",
    # Models
    "InputSource",
    "Input",
    "OutputSpec",
    "ProcessRequest",
    "Result",
    "ProcessResponse",
    # Pipeline stages
    "WorkspaceManager",
    "materialize_inputs",
    "fetch_input",
    "collect_results",
    "find_stream_candidate",
]
