"""
Storage Interface - Uploaded Image Access.

Defines the contract for reading uploaded images and the metadata
attached to them at upload time.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when an object cannot be read from storage."""


class StorageInterface(ABC):
    """
    Interface for object storage reads.

    Implementations should handle:
    - Metadata lookups without downloading the payload
    - Full payload downloads
    """

    @abstractmethod
    def get_metadata(self, key: str) -> dict[str, str]:
        """
        Returns the user metadata of a stored object.

        Args:
            key: Object key.

        Returns:
            Metadata mapping with lower-cased keys (e.g., {"userid": "..."}).
        """
        pass

    @abstractmethod
    def get_bytes(self, key: str) -> bytes:
        """
        Returns the full payload of a stored object.

        Args:
            key: Object key.
        """
        pass
