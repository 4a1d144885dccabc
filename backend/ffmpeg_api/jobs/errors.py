"""
Job pipeline errors.

Each error maps to one failure class of a process request:
- WorkspaceError: job directory could not be created (internal)
- InputResolutionError: an input could not be materialized (bad request)
- ResultCollectionError: outputs could not be collected (internal)
"""


class JobError(Exception):
    """Base exception for job pipeline failures."""
    pass


class WorkspaceError(JobError):
    """Raised when the job workspace cannot be created."""
    
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to create job workspace {path}: {reason}")


class InputResolutionError(JobError):
    """Raised when a named input cannot be written into the workspace."""
    
    def __init__(self, input_name: str, reason: str):
        self.input_name = input_name
        self.reason = reason
        super().__init__(f"input {input_name}: {reason}")


class MissingInputSourceError(InputResolutionError):
    """Raised when an input sets none of s3, http, base64 or temporary."""
    
    def __init__(self, input_name: str):
        super().__init__(input_name, "input source missing")


class ResultCollectionError(JobError):
    """Raised when a produced file cannot be read for delivery."""
    
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"output {name}: {reason}")


class ResultUploadError(ResultCollectionError):
    """Raised when a produced file cannot be uploaded. Aborts the whole result set."""
    pass
