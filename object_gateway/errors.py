# object_gateway/errors.py
"""Errors raised by gateway object operations"""
from enum import Enum
from typing import Optional

from urllib3.exceptions import HTTPError

NOT_FOUND_CODES = frozenset({'NoSuchKey', 'NoSuchBucket', 'NoSuchObject'})
DENIED_CODES = frozenset({'AccessDenied', 'AllAccessDisabled', 'InvalidAccessKeyId'})


class ErrorKind(Enum):
    """Coarse reason behind a failed operation"""
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    POLICY_DENIED = "policy_denied"
    UNKNOWN = "unknown"


class StorageOperationError(Exception):
    """
    Base class for object operation failures.

    The message embeds the underlying error's message; `kind` gives a
    machine-readable reason without changing the exception type.
    """
    operation = "Storage operation"

    def __init__(self, cause: BaseException, kind: Optional[ErrorKind] = None):
        super().__init__(f"{self.operation} failed: {cause}")
        self.kind = kind if kind is not None else classify_error(cause)


class UploadError(StorageOperationError):
    operation = "Upload"


class RetrievalError(StorageOperationError):
    operation = "Retrieval"


class PresignError(StorageOperationError):
    operation = "Presign"


class DeletionError(StorageOperationError):
    operation = "Deletion"


class ListingError(StorageOperationError):
    operation = "Listing"


def classify_error(err: BaseException) -> ErrorKind:
    """Map a client or transport exception to an ErrorKind"""
    # S3Error and its look-alikes expose the S3 error code as `code`
    code = getattr(err, 'code', None)
    if code in NOT_FOUND_CODES:
        return ErrorKind.NOT_FOUND
    if code in DENIED_CODES:
        return ErrorKind.POLICY_DENIED
    if isinstance(err, (HTTPError, OSError)):
        return ErrorKind.TRANSPORT
    return ErrorKind.UNKNOWN
