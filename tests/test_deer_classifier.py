import pytest

from detectors.deer_classifier import MIN_DEER_CONFIDENCE, classify
from detectors.interfaces.labels import DetectionLabel


def L(name, confidence):
    return DetectionLabel(name=name, confidence=confidence)


def test_deer_with_broad_context_label():
    labels = [L("deer", 82), L("wildlife", 91)]

    out = classify(labels)

    # wildlife is in the broad vocabulary
    assert out.deer_labels == [L("deer", 82), L("wildlife", 91)]
    assert out.confidence == 91
    assert out.is_deer is True


def test_context_label_alone_is_not_deer():
    out = classify([L("Wildlife", 95)])

    assert out.is_deer is False
    assert out.deer_labels == [L("Wildlife", 95)]


def test_empty_input():
    out = classify([])

    assert out.deer_labels == []
    assert out.confidence == 0
    assert out.is_deer is False


def test_unrelated_labels_are_dropped():
    out = classify([L("Tree", 99), L("Grass", 97), L("Outdoors", 96)])

    assert out.deer_labels == []
    assert out.confidence == 0
    assert out.is_deer is False


@pytest.mark.parametrize("name", ["deer", "Deer", "BUCK", "doe", "Fawn", "White-Tailed Deer"])
def test_narrow_labels_at_threshold_are_deer(name):
    out = classify([L(name, MIN_DEER_CONFIDENCE)])
    assert out.is_deer is True


def test_narrow_label_below_threshold_is_not_deer_even_with_strong_context():
    out = classify([L("Deer", 59), L("Animal", 99), L("Mammal", 98), L("Antler", 97)])

    assert out.is_deer is False
    assert out.confidence == 99


def test_any_qualifying_narrow_label_is_enough():
    out = classify([L("Deer", 40), L("Buck", 75)])
    assert out.is_deer is True


def test_deer_labels_subset_of_input_and_order_kept():
    labels = [L("Plant", 99), L("Mammal", 88), L("Tree", 90), L("Deer", 70)]

    out = classify(labels)

    assert out.deer_labels == [L("Mammal", 88), L("Deer", 70)]
    assert all(label in labels for label in out.deer_labels)
