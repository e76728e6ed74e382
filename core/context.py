"""
Service Context - Process-Scoped Collaborators.

Holds the AWS clients and the services built on them. Clients are created
lazily on first use and reused for the lifetime of the process; the context
is passed explicitly to the pipeline and the web layer.
"""

import threading
from functools import cached_property
from pathlib import Path
from typing import Any

import boto3
from botocore.config import Config

from config import get_config
from detectors.interfaces.labels import LabelDetectionInterface
from detectors.interfaces.persistence import DetectionStoreInterface
from detectors.interfaces.storage import StorageInterface
from detectors.services import (
    DynamoDBPersistenceService,
    RekognitionLabelService,
    S3StorageService,
    SqlitePersistenceService,
)
from logging_config import get_logger

logger = get_logger(__name__)


def build_client_config(config: dict[str, Any]) -> Config:
    """Shared botocore config: explicit timeouts, no retries unless configured."""
    return Config(
        region_name=config["AWS_REGION"],
        connect_timeout=config["AWS_CONNECT_TIMEOUT"],
        read_timeout=config["AWS_READ_TIMEOUT"],
        retries={"mode": "standard", "total_max_attempts": config["AWS_MAX_ATTEMPTS"]},
    )


class ServiceContext:
    """
    Lazily-initialized collaborators for one process.

    Any collaborator can be injected up front (tests, alternative backends);
    the rest are built from configuration on first access.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        storage: StorageInterface | None = None,
        label_detector: LabelDetectionInterface | None = None,
        detection_store: DetectionStoreInterface | None = None,
        session: boto3.session.Session | None = None,
    ):
        self.config = config or get_config()
        self._session = session
        self._lock = threading.Lock()
        if storage is not None:
            self.__dict__["storage"] = storage
        if label_detector is not None:
            self.__dict__["label_detector"] = label_detector
        if detection_store is not None:
            self.__dict__["detection_store"] = detection_store

    @cached_property
    def session(self) -> boto3.session.Session:
        return self._session or boto3.session.Session(
            region_name=self.config["AWS_REGION"]
        )

    @cached_property
    def client_config(self) -> Config:
        return build_client_config(self.config)

    def _client(self, service_name: str):
        # boto3 session client creation is not thread-safe
        with self._lock:
            return self.session.client(service_name, config=self.client_config)

    @cached_property
    def storage(self) -> StorageInterface:
        return S3StorageService(self._client("s3"), self.config["BUCKET_NAME"])

    @cached_property
    def label_detector(self) -> LabelDetectionInterface:
        return RekognitionLabelService(
            self._client("rekognition"),
            self.config["BUCKET_NAME"],
            max_labels=self.config["LABEL_MAX_LABELS"],
            min_confidence=self.config["LABEL_MIN_CONFIDENCE"],
        )

    @cached_property
    def detection_store(self) -> DetectionStoreInterface:
        if self.config["DETECTION_STORE"] == "sqlite":
            output_dir = Path(self.config["OUTPUT_DIR"])
            output_dir.mkdir(parents=True, exist_ok=True)
            db_path = output_dir / self.config["SQLITE_DB_FILENAME"]
            logger.info(f"Using SQLite detection store at {db_path}")
            return SqlitePersistenceService(db_path)

        with self._lock:
            dynamodb = self.session.resource("dynamodb", config=self.client_config)
        return DynamoDBPersistenceService(dynamodb.Table(self.config["TABLE_NAME"]))
