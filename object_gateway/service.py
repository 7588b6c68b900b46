# object_gateway/service.py
"""
Storage Gateway Service - High-level API over a single S3-compatible bucket.
"""
import asyncio
import io
import json
import logging
from typing import BinaryIO, List, Union

from minio import Minio

from .config import MinioSettings
from .errors import (
    DeletionError,
    ListingError,
    PresignError,
    RetrievalError,
    UploadError,
)
from .models import InitState, ObjectInfo, build_public_read_policy

logger = logging.getLogger(__name__)

BUCKET_REGION = 'us-east-1'
READ_CHUNK_SIZE = 32 * 1024


class StorageGatewayService:
    """
    Facade over the object store.
    Provisions the bucket on startup and exposes object upload, download,
    presign, delete and listing operations.
    """

    def __init__(self, client: Minio, settings: MinioSettings):
        """
        Initialize storage gateway.

        Args:
            client: Shared Minio client, owned by this service
            settings: Connection parameters the client was built from
        """
        self.client = client
        self.settings = settings
        self.bucket_name = settings.bucket_name
        self.state = InitState.UNINITIALIZED

    async def initialize(self) -> None:
        """
        Ensure the bucket exists and apply the public-read policy.

        Runs once at startup. The policy is applied on every run, even when
        the bucket already existed.

        Raises:
            Exception: Whatever the client raised; startup should abort
        """
        try:
            self.state = InitState.CHECKING
            exists = await asyncio.to_thread(
                self.client.bucket_exists,
                bucket_name=self.bucket_name
            )

            if not exists:
                self.state = InitState.CREATING
                await asyncio.to_thread(
                    self.client.make_bucket,
                    bucket_name=self.bucket_name,
                    location=BUCKET_REGION
                )
                logger.info(f"Created bucket: {self.bucket_name}")
            else:
                logger.debug(f"Bucket exists: {self.bucket_name}")

            self.state = InitState.POLICY_APPLYING
            policy = json.dumps(build_public_read_policy(self.bucket_name))
            await asyncio.to_thread(
                self.client.set_bucket_policy,
                bucket_name=self.bucket_name,
                policy=policy
            )
            logger.info(f"Applied public-read policy to bucket: {self.bucket_name}")

            self.state = InitState.READY
        except Exception as e:
            self.state = InitState.FAILED
            logger.error(f"Failed to initialize bucket {self.bucket_name}: {e}")
            raise

    async def upload_file(
        self,
        data: Union[bytes, memoryview, BinaryIO],
        size: int,
        content_type: str,
        object_name: str
    ) -> str:
        """
        Upload a payload to the bucket.

        Args:
            data: File content, as bytes or a readable binary stream
            size: Payload size in bytes
            content_type: MIME type stored as object metadata
            object_name: Object key in the bucket

        Returns:
            Public URL of the uploaded object

        Raises:
            UploadError: If the store rejects the write
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = io.BytesIO(data)

        try:
            await asyncio.to_thread(
                self.client.put_object,
                bucket_name=self.bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type
            )
        except Exception as e:
            logger.error(f"Upload failed for {object_name}: {e}")
            raise UploadError(e) from e

        logger.info(f"Uploaded: {object_name} ({size} bytes) to {self.bucket_name}")
        return self.get_public_url(object_name)

    async def get_file(self, object_name: str):
        """
        Open a stream over an object's content.

        The caller must drain it and call close() and release_conn() when done.

        Args:
            object_name: Object key in the bucket

        Returns:
            Streaming HTTP response positioned at the start of the object

        Raises:
            RetrievalError: If the object cannot be opened
        """
        try:
            return await asyncio.to_thread(
                self.client.get_object,
                bucket_name=self.bucket_name,
                object_name=object_name
            )
        except Exception as e:
            logger.error(f"Retrieval failed for {object_name}: {e}")
            raise RetrievalError(e) from e

    async def get_file_as_buffer(self, object_name: str) -> bytes:
        """
        Read a whole object into memory.

        Not meant for very large objects; use get_file and stream instead.

        Raises:
            RetrievalError: If the object cannot be opened or the read breaks off
        """
        response = await self.get_file(object_name)
        try:
            data = await asyncio.to_thread(_drain, response)
        except Exception as e:
            logger.error(f"Retrieval failed for {object_name} while reading: {e}")
            raise RetrievalError(e) from e

        logger.debug(f"Read {object_name} ({len(data)} bytes)")
        return data

    async def generate_presigned_url(self, object_name: str) -> str:
        """
        Get a time-limited signed GET URL.
        The expiry is the client's default.
        """
        try:
            return await asyncio.to_thread(
                self.client.presigned_get_object,
                bucket_name=self.bucket_name,
                object_name=object_name
            )
        except Exception as e:
            logger.error(f"URL generation failed for {object_name}: {e}")
            raise PresignError(e) from e

    async def delete_file(self, object_name: str) -> None:
        """Delete an object. Missing objects are left to the store to report."""
        try:
            await asyncio.to_thread(
                self.client.remove_object,
                bucket_name=self.bucket_name,
                object_name=object_name
            )
        except Exception as e:
            logger.error(f"Delete failed for {object_name}: {e}")
            raise DeletionError(e) from e

        logger.info(f"Deleted: {object_name}")

    async def list_objects(self, prefix: str = "", recursive: bool = True) -> List[ObjectInfo]:
        """
        List objects in the bucket.

        Args:
            prefix: Key prefix filter
            recursive: Walk nested prefixes; when False only the immediate
                level is returned, with sub-prefixes as is_dir entries

        Returns:
            All matching descriptors, fully materialized

        Raises:
            ListingError: If the listing fails at any point
        """
        def _collect() -> List[ObjectInfo]:
            objects = self.client.list_objects(
                bucket_name=self.bucket_name,
                prefix=prefix,
                recursive=recursive
            )
            return [ObjectInfo.from_minio(obj) for obj in objects]

        try:
            objects = await asyncio.to_thread(_collect)
        except Exception as e:
            logger.error(f"List failed for prefix '{prefix}': {e}")
            raise ListingError(e) from e

        logger.debug(f"Listed {len(objects)} objects under '{prefix}'")
        return objects

    def get_public_url(self, object_name: str) -> str:
        """Anonymous URL for an object; relies on the public-read policy"""
        s = self.settings
        return f"{s.scheme}://{s.endpoint}:{s.port}/{self.bucket_name}/{object_name}"


def _drain(response) -> bytes:
    # Close and release in the reading thread, only after reading stops
    try:
        return b''.join(response.stream(READ_CHUNK_SIZE))
    finally:
        try:
            response.close()
        finally:
            response.release_conn()
