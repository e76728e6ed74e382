"""
Storage Service - S3 Image Access.

Implements StorageInterface on top of an S3 client.
"""

from botocore.exceptions import BotoCoreError, ClientError

from detectors.interfaces.storage import StorageError, StorageInterface
from logging_config import get_logger

logger = get_logger(__name__)


class S3StorageService(StorageInterface):
    """
    Reads uploaded images and their upload-time metadata from one S3 bucket.
    """

    def __init__(self, client, bucket: str):
        """
        Args:
            client: boto3 S3 client.
            bucket: Name of the upload bucket.
        """
        self._client = client
        self._bucket = bucket

    def get_metadata(self, key: str) -> dict[str, str]:
        try:
            response = self._client.head_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to read metadata of {key}: {e}") from e

        # S3 returns user metadata without the x-amz-meta- prefix, lower-cased.
        metadata = response.get("Metadata") or {}
        return {str(k).lower(): v for k, v in metadata.items()}

    def get_bytes(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to download {key}: {e}") from e
