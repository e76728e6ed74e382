"""
Label Service - Rekognition Label Detection.

Implements LabelDetectionInterface using AWS Rekognition DetectLabels on
images that already live in S3.
"""

from botocore.exceptions import BotoCoreError, ClientError

from detectors.interfaces.labels import (
    DetectionLabel,
    LabelDetectionError,
    LabelDetectionInterface,
)
from logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_LABELS = 20
DEFAULT_MIN_CONFIDENCE = 60.0


class RekognitionLabelService(LabelDetectionInterface):
    """
    Labels S3-hosted images with Rekognition.

    Features:
    - Single DetectLabels call per image, no retries
    - Server-side MaxLabels / MinConfidence filtering
    - Provider errors normalized to LabelDetectionError
    """

    def __init__(
        self,
        client,
        bucket: str,
        max_labels: int = DEFAULT_MAX_LABELS,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ):
        """
        Args:
            client: boto3 Rekognition client.
            bucket: Bucket holding the images.
            max_labels: Upper bound on returned labels.
            min_confidence: Provider-side confidence floor (0-100).
        """
        self._client = client
        self._bucket = bucket
        self.max_labels = max_labels
        self.min_confidence = min_confidence

    def detect_labels(self, image_key: str) -> list[DetectionLabel]:
        try:
            response = self._client.detect_labels(
                Image={"S3Object": {"Bucket": self._bucket, "Name": image_key}},
                MaxLabels=self.max_labels,
                MinConfidence=self.min_confidence,
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "ClientError")
            raise LabelDetectionError(code) from e
        except BotoCoreError as e:
            raise LabelDetectionError(type(e).__name__) from e

        labels = [
            DetectionLabel.from_provider(raw.get("Name"), raw.get("Confidence"))
            for raw in response.get("Labels") or []
        ]
        logger.debug(f"Rekognition returned {len(labels)} labels for {image_key}")
        return labels
