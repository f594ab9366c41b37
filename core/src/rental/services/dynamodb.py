"""DynamoDB access for the cars and bookings tables.

Table names are environment-prefixed (`rental-dev-cars`, ...). Condition
failures on single writes and cancelled transactions are returned as False /
None rather than raised, since callers treat them as business outcomes.
"""

from typing import Any

import boto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from rental.config import get_environment, get_table_prefix
from rental.utils.logging import get_logger

logger = get_logger(__name__)

CONDITION_FAILED = "ConditionalCheckFailedException"
TRANSACTION_CANCELED = "TransactionCanceledException"

# Module-level singleton for connection reuse across requests
_dynamodb_service_instance: "DynamoDBService | None" = None


def get_dynamodb_service(environment: str | None = None) -> "DynamoDBService":
    """Get or create the singleton DynamoDB service instance.

    Args:
        environment: Environment name. Only used on first call.

    Returns:
        Shared DynamoDBService instance
    """
    global _dynamodb_service_instance
    if _dynamodb_service_instance is None:
        _dynamodb_service_instance = DynamoDBService(environment)
    return _dynamodb_service_instance


def reset_dynamodb_service() -> None:
    """Reset the singleton instance (for testing only).

    This allows tests to create a fresh DynamoDBService inside
    a mock_aws context.
    """
    global _dynamodb_service_instance
    _dynamodb_service_instance = None


class DynamoDBService:
    """Service for DynamoDB operations with environment-aware table names."""

    def __init__(self, environment: str | None = None) -> None:
        """Initialize DynamoDB service.

        Args:
            environment: Environment name (dev/prod). Defaults to ENVIRONMENT env var.
        """
        self.environment = environment or get_environment()
        self.name_prefix = get_table_prefix(self.environment)
        self._dynamodb = boto3.resource("dynamodb")
        self._client = boto3.client("dynamodb")
        self._serializer = TypeSerializer()

    def table_name(self, table: str) -> str:
        """Get full table name with prefix."""
        return f"{self.name_prefix}-{table}"

    def _get_table(self, table: str) -> Any:
        """Get DynamoDB table resource."""
        return self._dynamodb.Table(self.table_name(table))

    def serialize(self, item: dict[str, Any]) -> dict[str, Any]:
        """Convert a plain dict to low-level attribute values for the client API."""
        return {k: self._serializer.serialize(v) for k, v in item.items()}

    # Reads

    def get_item(
        self,
        table: str,
        key: dict[str, Any],
        consistent_read: bool = False,
    ) -> dict[str, Any] | None:
        """Fetch one item by primary key, or None when absent.

        Reservation checks pass consistent_read=True so the overlap test
        sees the latest committed spans.
        """
        response = self._get_table(table).get_item(Key=key, ConsistentRead=consistent_read)
        item: dict[str, Any] | None = response.get("Item")
        return item

    def scan(
        self,
        table: str,
        filter_expression: Any | None = None,
    ) -> list[dict[str, Any]]:
        """Read every item of a table (optionally filtered), across all pages."""
        kwargs: dict[str, Any] = {}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        tbl = self._get_table(table)
        items: list[dict[str, Any]] = []
        while True:
            response = tbl.scan(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    # Conditional writes. A failed condition is an expected outcome and is
    # reported through the return value; any other ClientError propagates.

    def put_item(
        self,
        table: str,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> bool:
        """Store an item. Returns False if the condition did not hold."""
        kwargs: dict[str, Any] = {"Item": item}
        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression
        try:
            self._get_table(table).put_item(**kwargs)
        except ClientError as e:
            if _error_code(e) == CONDITION_FAILED:
                return False
            raise
        return True

    def update_item(
        self,
        table: str,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_values: dict[str, Any],
        expression_attribute_names: dict[str, str] | None = None,
        condition_expression: str | None = None,
    ) -> dict[str, Any] | None:
        """Apply an update expression.

        Returns:
            The item after the update, or None if the condition did not hold
        """
        kwargs: dict[str, Any] = {
            "Key": key,
            "UpdateExpression": update_expression,
            "ExpressionAttributeValues": expression_attribute_values,
            "ReturnValues": "ALL_NEW",
        }
        if expression_attribute_names:
            kwargs["ExpressionAttributeNames"] = expression_attribute_names
        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression
        try:
            response = self._get_table(table).update_item(**kwargs)
        except ClientError as e:
            if _error_code(e) == CONDITION_FAILED:
                return None
            raise
        attrs: dict[str, Any] | None = response.get("Attributes")
        return attrs

    def transact_write(
        self,
        items: list[dict[str, Any]],
    ) -> bool:
        """Commit several writes all-or-nothing.

        Args:
            items: TransactWriteItem dicts in low-level attribute format
                (see `serialize`)

        Returns:
            True if committed, False if DynamoDB cancelled the transaction
            (a condition failed or another transaction touched the items)
        """
        try:
            self._client.transact_write_items(TransactItems=items)  # type: ignore[arg-type]
        except ClientError as e:
            if _error_code(e) != TRANSACTION_CANCELED:
                raise
            reasons = [r.get("Code") for r in e.response.get("CancellationReasons", [])]
            logger.info("Transaction cancelled reasons=%s", reasons)
            return False
        return True


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))
