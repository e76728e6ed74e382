"""
Detection Pipeline Services.

This package contains concrete implementations of the pipeline interfaces.
Each service encapsulates a specific responsibility and can be tested independently.

ARCHITECTURE:
- Services implement interfaces from detectors/interfaces/
- Services may use utils/ for low-level operations
- core/context.py wires them together
"""

from detectors.services.dynamodb_service import DynamoDBPersistenceService
from detectors.services.label_service import RekognitionLabelService
from detectors.services.persistence_service import SqlitePersistenceService
from detectors.services.storage_service import S3StorageService

__all__ = [
    "DynamoDBPersistenceService",
    "RekognitionLabelService",
    "S3StorageService",
    "SqlitePersistenceService",
]
