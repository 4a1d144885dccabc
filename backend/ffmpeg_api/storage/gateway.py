"""
Object Storage Gateway: S3-compatible get/put by address.

Addresses use the s3://bucket/key convention for both fetch and upload.

Design rules:
- The core only needs get(address) and put(base_address, local_path, name)
- put() writes to <prefix>/<name> and returns the canonical s3:// address
- One gateway per request; safe to share between the input fetch threads
- The boto3 client is built lazily, so requests that never touch storage
  do not need a valid s3Config
"""

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .errors import InvalidStorageAddressError, StorageTransferError
from .models import S3Config

logger = logging.getLogger(__name__)

S3_SCHEME = "s3://"


def parse_s3_address(address: str) -> Tuple[str, str]:
    """
    Split an s3://bucket/key address into (bucket, key).
    
    The key may be empty when the address ends right after the bucket
    separator (s3://bucket/), which is valid as an upload prefix.
    
    Raises:
        InvalidStorageAddressError: If the scheme, bucket or separator is missing
    """
    if not address.startswith(S3_SCHEME):
        raise InvalidStorageAddressError(address, f"expected '{S3_SCHEME}' prefix")
    
    trimmed = address[len(S3_SCHEME):]
    bucket, sep, key = trimmed.partition("/")
    if not bucket:
        raise InvalidStorageAddressError(address, "bucket is empty")
    if not sep:
        raise InvalidStorageAddressError(address, "missing '/' after bucket")
    return bucket, key


def join_key(prefix: str, name: str) -> str:
    """Append name to a key prefix, dropping a trailing '/' on the prefix."""
    prefix = prefix.removesuffix("/")
    if not prefix:
        return name
    return f"{prefix}/{name}"


class StorageGateway(ABC):
    """
    Abstract object storage capability.
    
    Implementations must be safe for concurrent use by several threads.
    """
    
    @abstractmethod
    def get(self, address: str) -> bytes:
        """Fetch the object at address and return its bytes."""
        pass
    
    @abstractmethod
    def put(self, base_address: str, local_path: Path, name: str) -> str:
        """Upload local_path to <base_address>/<name> and return its address."""
        pass


class S3Gateway(StorageGateway):
    """boto3-backed gateway for AWS S3 and S3-compatible stores (MinIO, Ceph)."""
    
    def __init__(self, config: S3Config, client=None):
        self.config = config
        self._client = client
        self._lock = threading.Lock()
    
    @classmethod
    def from_config(cls, config: S3Config) -> "S3Gateway":
        return cls(config)
    
    @property
    def client(self):
        with self._lock:
            if self._client is None:
                self._client = self._build_client()
            return self._client
    
    def _build_client(self):
        addressing_style = "path" if self.config.path_style else "auto"
        logger.debug(
            f"Creating S3 client endpoint={self.config.endpoint_url} "
            f"region={self.config.region or '<default>'} addressing={addressing_style}"
        )
        # Sessions are not shared between threads; a fresh one per client is safe.
        session = boto3.session.Session()
        return session.client(
            "s3",
            endpoint_url=self.config.endpoint_url,
            region_name=self.config.region or None,
            aws_access_key_id=self.config.access_key or None,
            aws_secret_access_key=self.config.secret_key or None,
            use_ssl=self.config.scheme == "https",
            config=BotoConfig(s3={"addressing_style": addressing_style}),
        )
    
    def get(self, address: str) -> bytes:
        bucket, key = parse_s3_address(address)
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            raise StorageTransferError("get", address, str(e)) from e
    
    def put(self, base_address: str, local_path: Path, name: str) -> str:
        bucket, prefix = parse_s3_address(base_address)
        key = join_key(prefix, name)
        address = f"{S3_SCHEME}{bucket}/{key}"
        
        try:
            with open(local_path, "rb") as fh:
                self.client.put_object(Bucket=bucket, Key=key, Body=fh)
        except OSError as e:
            raise StorageTransferError("put", address, f"cannot read {local_path}: {e}") from e
        except (BotoCoreError, ClientError) as e:
            raise StorageTransferError("put", address, str(e)) from e
        
        logger.info(f"Uploaded {local_path.name} to {address}")
        return address
