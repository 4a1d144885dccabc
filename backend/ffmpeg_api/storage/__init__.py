"""
Object storage access for job inputs and outputs.
"""

from .errors import (
    StorageError,
    InvalidStorageAddressError,
    StorageTransferError,
)
from .models import S3Config
from .gateway import (
    StorageGateway,
    S3Gateway,
    parse_s3_address,
    join_key,
)

__all__ = [
    # Errors
    "StorageError",
    "InvalidStorageAddressError",
    "StorageTransferError",
    # Config
    "S3Config",
    # Gateway
    "StorageGateway",
    "S3Gateway",
    "parse_s3_address",
    "join_key",
]
