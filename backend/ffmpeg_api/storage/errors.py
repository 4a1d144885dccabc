"""
Storage-specific errors.

Raised by the object storage gateway. Callers decide whether a storage
failure is a bad input (fetch) or an internal failure (upload).
"""


class StorageError(Exception):
    """Base exception for object storage operations."""
    pass


class InvalidStorageAddressError(StorageError):
    """Raised when an address is not of the form s3://bucket/key."""
    
    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid storage address '{address}': {reason}")


class StorageTransferError(StorageError):
    """Raised when a get or put against the object store fails."""
    
    def __init__(self, operation: str, address: str, reason: str):
        self.operation = operation
        self.address = address
        self.reason = reason
        super().__init__(f"Storage {operation} failed for {address}: {reason}")
