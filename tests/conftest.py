import pytest

from core.context import ServiceContext
from detectors.services.persistence_service import SqlitePersistenceService
from tests.fakes import FakeLabelDetector, FakeStorage


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def label_detector():
    return FakeLabelDetector()


@pytest.fixture
def store(tmp_path):
    return SqlitePersistenceService(tmp_path / "detections.db")


@pytest.fixture
def ctx(storage, label_detector, store):
    return ServiceContext(
        config={"INGEST_MAX_WORKERS": 1, "DETECTION_STORE": "sqlite"},
        storage=storage,
        label_detector=label_detector,
        detection_store=store,
    )
