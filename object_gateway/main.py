# object_gateway/main.py
"""Process startup: build the shared client and provision the bucket"""
import asyncio
import logging
from typing import Optional

from .config import MinioSettings
from .s3client import create_client
from .service import StorageGatewayService

logger = logging.getLogger(__name__)


async def init_storage(settings: Optional[MinioSettings] = None) -> StorageGatewayService:
    """Initialize storage gateway (client + bucket provisioning)"""
    if settings is None:
        settings = MinioSettings.from_env()

    try:
        logger.info("📦 Initializing storage...")
        logger.info(f"   Endpoint: {settings.scheme}://{settings.endpoint}:{settings.port}")
        logger.info(f"   Bucket: {settings.bucket_name}")

        client = create_client(settings)
        gateway = StorageGatewayService(client, settings)
        await gateway.initialize()

        logger.info("✅ Storage initialized")
        return gateway
    except Exception as e:
        logger.error(f"Failed to initialize storage: {e}")
        raise


def main():
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_storage())


if __name__ == '__main__':
    main()
