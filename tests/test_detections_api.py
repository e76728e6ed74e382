"""
Detections Blueprint Tests.

These tests verify status codes and response structure of the
verification and listing endpoints.
"""

from datetime import UTC, datetime
from unittest.mock import patch
from urllib.parse import quote

import pytest

from core.detection_record import build_record
from detectors.deer_classifier import classify
from detectors.interfaces.labels import DetectionLabel
from web.web_interface import create_web_interface

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def app(ctx):
    server = create_web_interface(ctx)["server"]
    server.config["TESTING"] = True
    return server


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def seeded(store):
    labels = [DetectionLabel("Deer", 82), DetectionLabel("Wildlife", 91)]
    record = build_record(
        "user-1",
        "uploads/abcd1234-cam.jpg",
        datetime(2025, 11, 2, 6, 41, 13, tzinfo=UTC),
        labels,
        classify(labels),
    )
    store.put(record)
    return record


def _verify_url(detection_id: str) -> str:
    return f"/api/detections/{quote(detection_id, safe='')}/verify"


class TestVerifyEndpoint:
    """Test POST /api/detections/<id>/verify."""

    def test_verify_existing_detection(self, client, seeded, store):
        response = client.post(
            _verify_url(seeded.detection_id),
            json={"isVerified": True, "isDeer": False},
            headers=HEADERS,
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["updated"] is True
        assert data["SK"] == seeded.sort_key
        assert data["isVerified"] is True
        assert data["isDeer"] is False

        [stored] = store.list_for_owner("user-1")
        assert stored.is_deer is False
        assert stored.confidence == 91
        assert stored.labels == seeded.labels

    def test_unknown_detection_is_404(self, client, store):
        response = client.post(
            _verify_url("2020-01-01T00:00:00.000Z#deadbeef"),
            json={"isVerified": True, "isDeer": True},
            headers=HEADERS,
        )

        assert response.status_code == 404
        assert response.get_json() == {"error": "Detection not found"}
        assert store.list_for_owner("user-1") == []

    def test_missing_user_header_is_401(self, client, seeded):
        response = client.post(
            _verify_url(seeded.detection_id), json={"isVerified": True, "isDeer": True}
        )
        assert response.status_code == 401

    def test_invalid_json_is_400(self, client, seeded):
        response = client.post(
            _verify_url(seeded.detection_id),
            data="{not json",
            content_type="application/json",
            headers=HEADERS,
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid JSON body"}

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"isDeer": True},
            {"isVerified": True},
            {"isVerified": "true", "isDeer": True},
            {"isVerified": True, "isDeer": 1},
            [True, True],
        ],
    )
    def test_malformed_body_is_400(self, client, seeded, store, body):
        response = client.post(
            _verify_url(seeded.detection_id), json=body, headers=HEADERS
        )

        assert response.status_code == 400
        [stored] = store.list_for_owner("user-1")
        assert stored.is_verified is False

    def test_is_verified_false_is_rejected(self, client, seeded):
        response = client.post(
            _verify_url(seeded.detection_id),
            json={"isVerified": False, "isDeer": True},
            headers=HEADERS,
        )
        assert response.status_code == 400

    def test_store_failure_is_500(self, client, seeded):
        with patch(
            "web.blueprints.detections.detections_service.verify_detection",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post(
                _verify_url(seeded.detection_id),
                json={"isVerified": True, "isDeer": True},
                headers=HEADERS,
            )
        assert response.status_code == 500

    def test_preflight(self, client):
        response = client.options(_verify_url("anything"))

        assert response.status_code == 204
        assert response.headers["Access-Control-Allow-Origin"]
        assert "x-user-id" in response.headers["Access-Control-Allow-Headers"]


class TestListEndpoint:
    """Test GET /api/detections."""

    def test_lists_only_callers_detections(self, client, seeded):
        response = client.get("/api/detections", headers=HEADERS)

        assert response.status_code == 200
        detections = response.get_json()["detections"]
        assert [d["SK"] for d in detections] == [seeded.sort_key]
        assert response.headers["Access-Control-Allow-Origin"]

        other = client.get("/api/detections", headers={"X-User-Id": "user-2"})
        assert other.get_json() == {"detections": []}

    def test_missing_user_header_is_401(self, client):
        response = client.get("/api/detections")
        assert response.status_code == 401
        assert response.get_json() == {"error": "Missing x-user-id header"}

    def test_preflight(self, client):
        response = client.options("/api/detections")
        assert response.status_code == 204
