"""
DynamoDB Persistence Service - Detection Records in a Single Table.

Implements DetectionStoreInterface on a DynamoDB table keyed by
PK ("USER#<owner>") and SK ("DETECT#<timestamp>#<suffix>"), with GSI1
(GSI1PK/GSI1SK) providing a global time-ordered view.
"""

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from detectors.interfaces.persistence import (
    DETECTION_PREFIX,
    DetectionNotFoundError,
    DetectionRecord,
    DetectionStoreInterface,
    owner_partition_key,
)
from logging_config import get_logger

logger = get_logger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class DynamoDBPersistenceService(DetectionStoreInterface):
    """
    Stores detection records in DynamoDB.

    Features:
    - Unconditional put for ingestion
    - attribute_exists(PK) conditional update for verification
    - Paginated per-owner query, newest first
    """

    def __init__(self, table):
        """
        Args:
            table: boto3 DynamoDB Table resource.
        """
        self._table = table

    def put(self, record: DetectionRecord) -> None:
        self._table.put_item(Item=record.to_item())

    def mark_verified(
        self, owner: str, sort_key: str, is_deer: bool, verified_at: str
    ) -> DetectionRecord:
        try:
            response = self._table.update_item(
                Key={"PK": owner_partition_key(owner), "SK": sort_key},
                UpdateExpression="SET isVerified = :v, isDeer = :d, verifiedAt = :ts",
                ConditionExpression="attribute_exists(PK)",
                ExpressionAttributeValues={
                    ":v": True,
                    ":d": is_deer,
                    ":ts": verified_at,
                },
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED:
                raise DetectionNotFoundError(owner, sort_key) from e
            raise

        return DetectionRecord.from_item(response["Attributes"])

    def list_for_owner(self, owner: str) -> list[DetectionRecord]:
        query = {
            "KeyConditionExpression": Key("PK").eq(owner_partition_key(owner))
            & Key("SK").begins_with(DETECTION_PREFIX),
            "ScanIndexForward": False,
        }

        records = []
        while True:
            response = self._table.query(**query)
            records.extend(DetectionRecord.from_item(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            query["ExclusiveStartKey"] = last_key
        return records
