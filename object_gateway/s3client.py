# object_gateway/s3client.py
"""
S3-compatible client factory.
Works with MinIO, AWS S3, GCS (S3-compatible API), and other S3-compatible storage.
"""
import logging

from minio import Minio

from .config import MinioSettings

logger = logging.getLogger(__name__)


def create_client(settings: MinioSettings) -> Minio:
    """
    Build the shared storage handle.

    No request is sent here; the client connects lazily on first use.
    Missing or malformed settings are reported by the Minio constructor
    or by the first request, whichever notices first.

    Args:
        settings: Connection parameters

    Returns:
        Configured Minio client
    """
    client = Minio(
        f"{settings.endpoint}:{settings.port}",
        access_key=settings.access_key,
        secret_key=settings.secret_key,
        secure=settings.use_ssl
    )
    logger.debug(f"Created client for {settings.scheme}://{settings.endpoint}:{settings.port}")
    return client
