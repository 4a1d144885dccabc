"""
Object storage connection settings.

Carried per request in the `s3Config` field. The service holds no storage
credentials of its own.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class S3Config(BaseModel):
    """Connection settings for an S3-compatible endpoint."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    endpoint: str = ""
    """Host and optional port, without scheme (e.g. 'minio:9000')."""
    
    region: str = ""
    
    access_key: str = ""
    
    secret_key: str = ""
    
    use_ssl: Optional[bool] = Field(default=None, alias="useSSL")
    """TLS on/off. Absent means on."""
    
    path_style: bool = True
    """Address buckets as https://endpoint/bucket rather than bucket.endpoint."""
    
    @property
    def scheme(self) -> str:
        if self.use_ssl is None or self.use_ssl:
            return "https"
        return "http"
    
    @property
    def endpoint_url(self) -> Optional[str]:
        if not self.endpoint:
            return None
        return f"{self.scheme}://{self.endpoint}"
