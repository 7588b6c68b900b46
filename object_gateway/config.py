# object_gateway/config.py
"""MinIO connection settings, read once from the environment at startup"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class MinioSettings:
    """Connection parameters for the object store"""
    endpoint: str
    port: int
    use_ssl: bool
    access_key: str
    secret_key: str
    bucket_name: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MinioSettings':
        """
        Load settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            MinioSettings instance
        """
        env = os.environ if environ is None else environ
        return cls(
            endpoint=env.get('MINIO_ENDPOINT', 'localhost'),
            port=int(env.get('MINIO_PORT', 9000)),
            use_ssl=env.get('MINIO_USE_SSL', 'false').lower() == 'true',
            access_key=env.get('MINIO_ACCESS_KEY', 'minioadmin'),
            secret_key=env.get('MINIO_SECRET_KEY', 'minioadmin'),
            bucket_name=env.get('MINIO_BUCKET_NAME', 'uploads'),
        )

    @property
    def scheme(self) -> str:
        return 'https' if self.use_ssl else 'http'
