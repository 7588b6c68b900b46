"""Shared fixtures: settings and an in-memory stand-in for the Minio client."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

import pytest

from object_gateway.config import MinioSettings
from object_gateway.service import StorageGatewayService


class FakeS3Error(Exception):
    """Carries an S3 error code the way minio.error.S3Error does."""

    def __init__(self, code: str, message: str):
        super().__init__(f"S3 operation failed; code: {code}, message: {message}")
        self.code = code


@dataclass
class FakeListing:
    object_name: str
    size: Optional[int] = None
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    is_dir: bool = False
    content_type: Optional[str] = None


class FakeResponse:
    """Streaming response with the close/release_conn surface of urllib3's."""

    def __init__(self, payload: bytes, fail_after: Optional[int] = None, error: Exception = None):
        self.payload = payload
        self.fail_after = fail_after
        self.error = error
        self.closed = False
        self.released = False

    def stream(self, amt: int = 2 ** 16):
        for i, start in enumerate(range(0, len(self.payload), amt)):
            if self.fail_after is not None and i >= self.fail_after:
                raise self.error
            yield self.payload[start:start + amt]

    def read(self) -> bytes:
        return self.payload

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


class FakeMinio:
    """Single-process object store honoring the Minio method signatures the gateway uses."""

    def __init__(self):
        self.buckets: Dict[str, Dict[str, Tuple[bytes, str]]] = {}
        self.policies: Dict[str, str] = {}
        self.made_buckets = []
        self.policy_calls = []

    def bucket_exists(self, bucket_name):
        return bucket_name in self.buckets

    def make_bucket(self, bucket_name, location=None):
        self.buckets[bucket_name] = {}
        self.made_buckets.append((bucket_name, location))

    def set_bucket_policy(self, bucket_name, policy):
        self.policies[bucket_name] = policy
        self.policy_calls.append(bucket_name)

    def put_object(self, bucket_name, object_name, data, length, content_type='application/octet-stream'):
        self._bucket(bucket_name)[object_name] = (data.read(length), content_type)

    def get_object(self, bucket_name, object_name):
        objects = self._bucket(bucket_name)
        if object_name not in objects:
            raise FakeS3Error('NoSuchKey', 'The specified key does not exist.')
        return FakeResponse(objects[object_name][0])

    def presigned_get_object(self, bucket_name, object_name):
        return f"http://localhost:9000/{bucket_name}/{object_name}?X-Amz-Signature=abc"

    def remove_object(self, bucket_name, object_name):
        self._bucket(bucket_name).pop(object_name, None)

    def list_objects(self, bucket_name, prefix=None, recursive=False):
        prefix = prefix or ''
        seen_dirs = set()
        for name, (payload, content_type) in sorted(self._bucket(bucket_name).items()):
            if not name.startswith(prefix):
                continue
            rest = name[len(prefix):]
            if not recursive and '/' in rest:
                dir_name = prefix + rest.split('/', 1)[0] + '/'
                if dir_name not in seen_dirs:
                    seen_dirs.add(dir_name)
                    yield FakeListing(object_name=dir_name, is_dir=True)
                continue
            yield FakeListing(
                object_name=name,
                size=len(payload),
                etag='etag',
                last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
                content_type=content_type
            )

    def _bucket(self, bucket_name):
        if bucket_name not in self.buckets:
            raise FakeS3Error('NoSuchBucket', 'The specified bucket does not exist')
        return self.buckets[bucket_name]


@pytest.fixture
def settings():
    return MinioSettings(
        endpoint='store.example.com',
        port=443,
        use_ssl=True,
        access_key='access',
        secret_key='secret',
        bucket_name='assets',
    )


@pytest.fixture
def fake_minio():
    return FakeMinio()


@pytest.fixture
def gateway(fake_minio, settings):
    """Gateway over the fake store, with its bucket already present."""
    fake_minio.buckets[settings.bucket_name] = {}
    return StorageGatewayService(fake_minio, settings)
