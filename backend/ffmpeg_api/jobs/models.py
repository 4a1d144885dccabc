"""
Process request and response models.

A ProcessRequest declares everything one job needs:
- Where to fetch inputs from (storage, HTTP, inline base64, or placeholder)
- The ordered ffmpeg invocations to run
- How results are delivered (upload, inline base64, or streamed)

All models use Pydantic for validation. JSON field names are camelCase;
snake_case attribute names are accepted on input as well.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..storage.models import S3Config


class InputSource(str, Enum):
    """
    Input source selectors, in resolution priority order.
    
    When a request sets several selectors on one input, the first
    non-empty one in this order wins.
    """
    
    S3 = "s3"
    HTTP = "http"
    BASE64 = "base64"
    TEMPORARY = "temporary"


class Input(BaseModel):
    """
    A named input descriptor.
    
    Exactly one selector is expected. An input with none set is
    malformed and fails at resolution time, naming the input.
    """
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    s3: Optional[str] = None
    """Object address, s3://bucket/key."""
    
    http: Optional[str] = None
    """Plain HTTP(S) URL fetched with GET."""
    
    base64: Optional[str] = None
    """Inline payload, standard base64 alphabet."""
    
    temporary: bool = False
    """Reserve the name without fetching anything; excluded from outputs."""
    
    @property
    def source(self) -> Optional[InputSource]:
        if self.s3:
            return InputSource.S3
        if self.http:
            return InputSource.HTTP
        if self.base64:
            return InputSource.BASE64
        if self.temporary:
            return InputSource.TEMPORARY
        return None


class OutputSpec(BaseModel):
    """
    Result delivery options.
    
    A non-empty inline_content_type selects streaming mode and overrides
    the batch options (s3, base64).
    """
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    s3: Optional[str] = None
    """Upload prefix; each output goes to <s3>/<file name>."""
    
    base64: bool = False
    """Inline each output as base64 in the JSON response."""
    
    inline_content_type: Optional[str] = None
    """Content type of the streamed response body."""
    
    @property
    def streaming(self) -> bool:
        return bool(self.inline_content_type)


class ProcessRequest(BaseModel):
    """A single job: inputs, ffmpeg steps, and output delivery."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    s3_config: S3Config = Field(default_factory=S3Config)
    
    inputs: Dict[str, Input] = Field(default_factory=dict)
    """Input name -> descriptor. The name is the file name inside the job directory."""
    
    commands: List[List[str]] = Field(default_factory=list)
    """ffmpeg argument lists, executed in order."""
    
    output: OutputSpec = Field(default_factory=OutputSpec)
    
    @field_validator("inputs")
    @classmethod
    def _names_are_plain_file_names(cls, inputs: Dict[str, Input]) -> Dict[str, Input]:
        for name in inputs:
            if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
                raise ValueError(f"input name '{name}' is not a plain file name")
        return inputs


class Result(BaseModel):
    """Delivery record for one produced file."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    url: Optional[str] = None
    """Uploaded object address, when an upload target was configured."""
    
    base64: Optional[str] = None
    """File content, when inlining was requested."""


class ProcessResponse(BaseModel):
    """Batch mode response body."""
    
    results: Dict[str, Result] = Field(default_factory=dict)
