"""
Detection Pipeline Interfaces.

This package defines the abstract interfaces for the external collaborators
of the ingestion pipeline. These interfaces enable:
- Clear service boundaries
- Dependency injection
- Independent testing of each component

ARCHITECTURE:
- core/ingest_core.py only coordinates these interfaces
- Concrete implementations live in services/
- No direct dependencies between implementations
"""

from detectors.interfaces.labels import (
    DetectionLabel,
    LabelDetectionError,
    LabelDetectionInterface,
)
from detectors.interfaces.persistence import (
    DetectionNotFoundError,
    DetectionRecord,
    DetectionStoreInterface,
)
from detectors.interfaces.storage import StorageError, StorageInterface

__all__ = [
    # Interfaces
    "LabelDetectionInterface",
    "StorageInterface",
    "DetectionStoreInterface",
    # Data Classes
    "DetectionLabel",
    "DetectionRecord",
    # Errors
    "LabelDetectionError",
    "StorageError",
    "DetectionNotFoundError",
]
