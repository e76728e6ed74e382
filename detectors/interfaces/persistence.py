"""
Persistence Interface - Detection Record Storage.

Defines the detection record, its key layout, and the contract for
storing, verifying and listing records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from detectors.interfaces.labels import DetectionLabel

OWNER_PREFIX = "USER#"
DETECTION_PREFIX = "DETECT#"
GSI1_PARTITION = "DETECTIONS"


class DetectionNotFoundError(Exception):
    """Raised when a conditional update targets a record that does not exist."""

    def __init__(self, owner: str, sort_key: str):
        super().__init__(f"Detection not found: {sort_key} (owner {owner})")
        self.owner = owner
        self.sort_key = sort_key


def owner_partition_key(owner: str) -> str:
    return f"{OWNER_PREFIX}{owner}"


def detection_sort_key(detection_id: str) -> str:
    return f"{DETECTION_PREFIX}{detection_id}"


@dataclass
class DetectionRecord:
    """
    The persisted outcome of classifying one image.

    Attributes:
        owner: Identifier of the uploading user.
        sort_key: "DETECT#<capture timestamp>#<suffix>", unique per owner.
        image_key: Storage key of the source image.
        capture_date: ISO-8601 UTC capture timestamp.
        labels: Full label set (empty if label detection failed).
        deer_labels: Subset of labels in the deer-relevance vocabulary.
        confidence: Highest confidence among deer_labels, 0 if none.
        is_deer: Deer verdict (classifier heuristic, or user correction).
        is_verified: Whether a user has verified the verdict.
        created_at: ISO-8601 UTC creation timestamp.
        verified_at: ISO-8601 UTC verification timestamp, None until verified.
    """

    owner: str
    sort_key: str
    image_key: str
    capture_date: str
    labels: list[DetectionLabel] = field(default_factory=list)
    deer_labels: list[DetectionLabel] = field(default_factory=list)
    confidence: int = 0
    is_deer: bool = False
    is_verified: bool = False
    created_at: str = ""
    verified_at: str | None = None

    @property
    def partition_key(self) -> str:
        return owner_partition_key(self.owner)

    @property
    def detection_id(self) -> str:
        return self.sort_key.removeprefix(DETECTION_PREFIX)

    def to_item(self) -> dict:
        """Returns the store attribute map of this record."""
        item = {
            "PK": self.partition_key,
            "SK": self.sort_key,
            "imageKey": self.image_key,
            "captureDate": self.capture_date,
            "labels": [label.to_dict() for label in self.labels],
            "deerLabels": [label.to_dict() for label in self.deer_labels],
            "confidence": self.confidence,
            "isDeer": self.is_deer,
            "isVerified": self.is_verified,
            "createdAt": self.created_at,
            "GSI1PK": GSI1_PARTITION,
            "GSI1SK": self.capture_date,
        }
        if self.verified_at:
            item["verifiedAt"] = self.verified_at
        return item

    @classmethod
    def from_item(cls, item: dict) -> "DetectionRecord":
        """Builds a record from a store attribute map."""
        return cls(
            owner=str(item["PK"]).removeprefix(OWNER_PREFIX),
            sort_key=str(item["SK"]),
            image_key=str(item.get("imageKey", "")),
            capture_date=str(item.get("captureDate", "")),
            labels=[DetectionLabel.from_dict(x) for x in item.get("labels") or []],
            deer_labels=[
                DetectionLabel.from_dict(x) for x in item.get("deerLabels") or []
            ],
            # DynamoDB returns numbers as Decimal
            confidence=int(item.get("confidence", 0)),
            is_deer=bool(item.get("isDeer", False)),
            is_verified=bool(item.get("isVerified", False)),
            created_at=str(item.get("createdAt", "")),
            verified_at=item.get("verifiedAt"),
        )


class DetectionStoreInterface(ABC):
    """
    Interface for detection record persistence.

    Implementations should handle:
    - Unconditional create/overwrite keyed by (owner partition, sort key)
    - Atomic conditional update guarded by record existence
    - Per-owner listing ordered by sort key
    """

    @abstractmethod
    def put(self, record: DetectionRecord) -> None:
        """
        Creates or overwrites a detection record.

        Args:
            record: Record to persist.
        """
        pass

    @abstractmethod
    def mark_verified(
        self, owner: str, sort_key: str, is_deer: bool, verified_at: str
    ) -> DetectionRecord:
        """
        Marks an existing record as verified in a single atomic write.

        Args:
            owner: Owner identifier.
            sort_key: Full sort key ("DETECT#...").
            is_deer: User-supplied deer verdict.
            verified_at: ISO-8601 verification timestamp.

        Returns:
            The updated record.

        Raises:
            DetectionNotFoundError: If no such record exists. Nothing is written.
        """
        pass

    @abstractmethod
    def list_for_owner(self, owner: str) -> list[DetectionRecord]:
        """
        Lists all detection records of an owner, newest sort key first.

        Args:
            owner: Owner identifier.
        """
        pass
