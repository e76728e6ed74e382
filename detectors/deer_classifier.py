"""
Deer Relevance Classifier.

Decides from a label set whether an image shows a deer. Two vocabularies:
the broad one selects labels worth showing as supporting evidence, the
narrow one decides the boolean verdict.
"""

from dataclasses import dataclass, field

from detectors.interfaces.labels import DetectionLabel

# Deer plus context labels that commonly co-occur with deer sightings.
DEER_LABELS = frozenset(
    {
        "deer",
        "buck",
        "doe",
        "fawn",
        "animal",
        "wildlife",
        "mammal",
        "antler",
        "white-tailed deer",
    }
)

# Labels that on their own justify a deer verdict.
DEER_SPECIFIC_LABELS = frozenset(
    {
        "deer",
        "buck",
        "doe",
        "fawn",
        "white-tailed deer",
    }
)

MIN_DEER_CONFIDENCE = 60


@dataclass
class ClassifierOutput:
    """
    Result of deer relevance classification.

    Attributes:
        deer_labels: Input labels in the broad deer vocabulary, input order kept.
        confidence: Highest confidence among deer_labels, 0 if none.
        is_deer: True if a deer-specific label reaches MIN_DEER_CONFIDENCE.
    """

    deer_labels: list[DetectionLabel] = field(default_factory=list)
    confidence: int = 0
    is_deer: bool = False


def classify(labels: list[DetectionLabel]) -> ClassifierOutput:
    """Classifies a label set for deer relevance. Never raises on valid labels."""
    deer_labels = [label for label in labels if label.name.lower() in DEER_LABELS]

    confidence = max((label.confidence for label in deer_labels), default=0)

    is_deer = any(
        label.name.lower() in DEER_SPECIFIC_LABELS
        and label.confidence >= MIN_DEER_CONFIDENCE
        for label in deer_labels
    )

    return ClassifierOutput(
        deer_labels=deer_labels, confidence=confidence, is_deer=is_deer
    )
