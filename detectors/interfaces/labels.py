"""
Label Detection Interface - Image Labelling.

Defines the contract for the external label-detection collaborator:
given the storage key of an image, return (label, confidence) pairs.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


class LabelDetectionError(Exception):
    """Raised when the label-detection provider cannot label an image."""


@dataclass(frozen=True)
class DetectionLabel:
    """
    A single label returned by the label-detection collaborator.

    Attributes:
        name: Label name as reported by the provider (e.g., "Deer").
        confidence: Integer confidence 0-100.
    """

    name: str
    confidence: int

    @classmethod
    def from_provider(cls, name: str | None, confidence: float | None) -> "DetectionLabel":
        """Builds a label from raw provider values, rounding half up."""
        return cls(
            name=name or "Unknown",
            confidence=int(math.floor((confidence or 0.0) + 0.5)),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "confidence": self.confidence}

    @classmethod
    def from_dict(cls, data: dict) -> "DetectionLabel":
        return cls(name=str(data["name"]), confidence=int(data["confidence"]))


class LabelDetectionInterface(ABC):
    """
    Interface for label detection.

    Implementations should handle:
    - Calling the provider exactly once per request
    - Server-side confidence floor and label limit
    - Wrapping provider-specific failures in LabelDetectionError
    """

    @abstractmethod
    def detect_labels(self, image_key: str) -> list[DetectionLabel]:
        """
        Detects labels for a stored image.

        Args:
            image_key: Storage key of the image.

        Returns:
            List of DetectionLabel, possibly empty.

        Raises:
            LabelDetectionError: If the provider call fails.
        """
        pass
