"""
AWS-backed collaborator tests with mocked boto3 clients.
"""

import io
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from detectors.interfaces.labels import DetectionLabel, LabelDetectionError
from detectors.interfaces.persistence import DetectionNotFoundError, DetectionRecord
from detectors.interfaces.storage import StorageError
from detectors.services.dynamodb_service import DynamoDBPersistenceService
from detectors.services.label_service import RekognitionLabelService
from detectors.services.storage_service import S3StorageService


def _client_error(code: str, operation: str = "Op") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestS3StorageService:
    def test_metadata_keys_are_lower_cased(self):
        client = MagicMock()
        client.head_object.return_value = {"Metadata": {"UserId": "u-1"}}

        metadata = S3StorageService(client, "bucket").get_metadata("uploads/a.jpg")

        assert metadata == {"userid": "u-1"}
        client.head_object.assert_called_once_with(Bucket="bucket", Key="uploads/a.jpg")

    def test_missing_metadata_is_empty(self):
        client = MagicMock()
        client.head_object.return_value = {}

        assert S3StorageService(client, "bucket").get_metadata("k") == {}

    def test_get_bytes_reads_body(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": io.BytesIO(b"\xff\xd8data")}

        assert S3StorageService(client, "bucket").get_bytes("k") == b"\xff\xd8data"

    def test_client_error_becomes_storage_error(self):
        client = MagicMock()
        client.get_object.side_effect = _client_error("NoSuchKey", "GetObject")

        with pytest.raises(StorageError):
            S3StorageService(client, "bucket").get_bytes("k")


class TestRekognitionLabelService:
    def test_maps_and_rounds_labels(self):
        client = MagicMock()
        client.detect_labels.return_value = {
            "Labels": [
                {"Name": "Deer", "Confidence": 82.5},
                {"Name": "Wildlife", "Confidence": 91.49},
                {"Confidence": 70.0},
            ]
        }

        labels = RekognitionLabelService(client, "bucket").detect_labels("uploads/a.jpg")

        assert labels == [
            DetectionLabel("Deer", 83),
            DetectionLabel("Wildlife", 91),
            DetectionLabel("Unknown", 70),
        ]
        client.detect_labels.assert_called_once_with(
            Image={"S3Object": {"Bucket": "bucket", "Name": "uploads/a.jpg"}},
            MaxLabels=20,
            MinConfidence=60.0,
        )

    def test_no_labels(self):
        client = MagicMock()
        client.detect_labels.return_value = {"Labels": []}

        assert RekognitionLabelService(client, "bucket").detect_labels("k") == []

    @pytest.mark.parametrize(
        "error",
        [
            _client_error("InvalidImageFormatException", "DetectLabels"),
            EndpointConnectionError(endpoint_url="https://rekognition"),
        ],
    )
    def test_provider_errors_are_normalized(self, error):
        client = MagicMock()
        client.detect_labels.side_effect = error

        with pytest.raises(LabelDetectionError):
            RekognitionLabelService(client, "bucket").detect_labels("k")


def _item(**overrides):
    item = {
        "PK": "USER#u-1",
        "SK": "DETECT#2025-11-02T06:41:13.000Z#abcd1234",
        "imageKey": "uploads/abcd1234-x.jpg",
        "captureDate": "2025-11-02T06:41:13.000Z",
        "labels": [{"name": "Deer", "confidence": Decimal("82")}],
        "deerLabels": [{"name": "Deer", "confidence": Decimal("82")}],
        "confidence": Decimal("82"),
        "isDeer": True,
        "isVerified": False,
        "createdAt": "2025-11-02T06:42:00.000Z",
        "GSI1PK": "DETECTIONS",
        "GSI1SK": "2025-11-02T06:41:13.000Z",
    }
    item.update(overrides)
    return item


class TestDynamoDBPersistenceService:
    def test_put_writes_full_item_unconditionally(self):
        table = MagicMock()
        record = DetectionRecord.from_item(_item())

        DynamoDBPersistenceService(table).put(record)

        kwargs = table.put_item.call_args.kwargs
        assert kwargs["Item"]["PK"] == "USER#u-1"
        assert kwargs["Item"]["confidence"] == 82
        assert "ConditionExpression" not in kwargs

    def test_mark_verified_is_conditional(self):
        table = MagicMock()
        table.update_item.return_value = {
            "Attributes": _item(isDeer=False, isVerified=True, verifiedAt="2025-11-03T00:00:00.000Z")
        }

        record = DynamoDBPersistenceService(table).mark_verified(
            "u-1", "DETECT#2025-11-02T06:41:13.000Z#abcd1234", False, "2025-11-03T00:00:00.000Z"
        )

        kwargs = table.update_item.call_args.kwargs
        assert kwargs["Key"] == {"PK": "USER#u-1", "SK": "DETECT#2025-11-02T06:41:13.000Z#abcd1234"}
        assert kwargs["ConditionExpression"] == "attribute_exists(PK)"
        assert kwargs["ExpressionAttributeValues"][":v"] is True
        assert kwargs["ExpressionAttributeValues"][":d"] is False
        assert record.is_verified is True
        assert record.is_deer is False
        assert record.confidence == 82

    def test_conditional_failure_is_not_found(self):
        table = MagicMock()
        table.update_item.side_effect = _client_error(
            "ConditionalCheckFailedException", "UpdateItem"
        )

        with pytest.raises(DetectionNotFoundError):
            DynamoDBPersistenceService(table).mark_verified("u-1", "DETECT#x", True, "ts")

        table.put_item.assert_not_called()

    def test_other_client_errors_propagate(self):
        table = MagicMock()
        table.update_item.side_effect = _client_error("AccessDeniedException", "UpdateItem")

        with pytest.raises(ClientError):
            DynamoDBPersistenceService(table).mark_verified("u-1", "DETECT#x", True, "ts")

    def test_list_for_owner_follows_pagination(self):
        table = MagicMock()
        table.query.side_effect = [
            {"Items": [_item(SK="DETECT#b")], "LastEvaluatedKey": {"PK": "USER#u-1", "SK": "DETECT#b"}},
            {"Items": [_item(SK="DETECT#a")]},
        ]

        records = DynamoDBPersistenceService(table).list_for_owner("u-1")

        assert [r.sort_key for r in records] == ["DETECT#b", "DETECT#a"]
        first_call, second_call = table.query.call_args_list
        assert first_call.kwargs["ScanIndexForward"] is False
        assert "ExclusiveStartKey" not in first_call.kwargs
        assert second_call.kwargs["ExclusiveStartKey"] == {"PK": "USER#u-1", "SK": "DETECT#b"}
