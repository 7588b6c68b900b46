# object_gateway/models.py
"""
Data models for the storage gateway.
The object store is the only source of truth; nothing here is persisted.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

POLICY_VERSION = '2012-10-17'


class InitState(Enum):
    """Bucket provisioning state of the gateway"""
    UNINITIALIZED = "uninitialized"
    CHECKING = "checking"
    CREATING = "creating"
    POLICY_APPLYING = "policy_applying"
    READY = "ready"
    FAILED = "failed"


@dataclass
class ObjectInfo:
    """Object descriptor returned by listings"""
    object_name: str
    size: Optional[int] = None
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    is_dir: bool = False
    content_type: Optional[str] = None

    @staticmethod
    def from_minio(obj) -> 'ObjectInfo':
        """Create from a minio listing entry"""
        return ObjectInfo(
            object_name=obj.object_name,
            size=obj.size,
            etag=obj.etag,
            last_modified=obj.last_modified,
            is_dir=obj.is_dir,
            content_type=obj.content_type
        )


def build_public_read_policy(bucket_name: str) -> dict:
    """
    Bucket policy granting anonymous s3:GetObject on every object in the bucket.

    Args:
        bucket_name: Bucket the policy is attached to

    Returns:
        Policy document ready for json.dumps
    """
    return {
        'Version': POLICY_VERSION,
        'Statement': [
            {
                'Effect': 'Allow',
                'Principal': {'AWS': ['*']},
                'Action': ['s3:GetObject'],
                'Resource': [f'arn:aws:s3:::{bucket_name}/*']
            }
        ]
    }
