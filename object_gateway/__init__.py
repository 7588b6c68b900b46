"""
Object Gateway

Facade over a single bucket in an S3-compatible store (MinIO, AWS S3, ...).
Provisions the bucket with a public-read policy at startup and exposes
upload, download, presign, delete and listing operations.
"""
from .config import MinioSettings
from .errors import (
    ErrorKind,
    StorageOperationError,
    UploadError,
    RetrievalError,
    PresignError,
    DeletionError,
    ListingError,
)
from .models import InitState, ObjectInfo, build_public_read_policy
from .s3client import create_client
from .service import StorageGatewayService

__all__ = [
    'MinioSettings',
    'ErrorKind',
    'StorageOperationError',
    'UploadError',
    'RetrievalError',
    'PresignError',
    'DeletionError',
    'ListingError',
    'InitState',
    'ObjectInfo',
    'build_public_read_policy',
    'create_client',
    'StorageGatewayService'
]
