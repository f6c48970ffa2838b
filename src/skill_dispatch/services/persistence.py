"""Persistent attributes stored in DynamoDB."""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ..errors import PersistenceError
from ..models.response import ResponseEnvelope
from .pipeline import HandlerInput, RequestInterceptor, ResponseInterceptor

logger = logging.getLogger(__name__)


class DynamoDbPersistenceAdapter:
    """
    Read and write per-user attributes in a DynamoDB table.

    Each item is keyed by ``partition_key_name`` and stores the attributes as
    a JSON string under ``attribute_name``. The table must already exist.
    """

    def __init__(
        self,
        table_name: str,
        partition_key_name: str = "id",
        attribute_name: str = "attributes",
        region: str = "us-east-1",
        client: Any = None,
    ) -> None:
        self.table_name = table_name
        self.partition_key_name = partition_key_name
        self.attribute_name = attribute_name
        self._client = client or boto3.client("dynamodb", region_name=region)

    def get_attributes(self, user_id: str) -> dict[str, Any]:
        """Return stored attributes for the user, or an empty dict."""
        try:
            result = self._client.get_item(
                TableName=self.table_name,
                Key={self.partition_key_name: {"S": user_id}},
                ConsistentRead=True,
            )
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            error_message = e.response["Error"]["Message"]
            logger.error(f"DynamoDB get_item error ({error_code}): {error_message}")
            raise PersistenceError(f"Failed to load attributes: {error_message}") from e

        item = result.get("Item")
        if not item or self.attribute_name not in item:
            return {}

        try:
            return json.loads(item[self.attribute_name]["S"])
        except (KeyError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Stored attributes for {user_id} are not valid JSON") from e

    def save_attributes(self, user_id: str, attributes: dict[str, Any]) -> None:
        """Replace the stored attributes for the user."""
        try:
            self._client.put_item(
                TableName=self.table_name,
                Item={
                    self.partition_key_name: {"S": user_id},
                    self.attribute_name: {"S": json.dumps(attributes)},
                },
            )
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            error_message = e.response["Error"]["Message"]
            logger.error(f"DynamoDB put_item error ({error_code}): {error_message}")
            raise PersistenceError(f"Failed to save attributes: {error_message}") from e

        logger.info(f"Saved persistent attributes for {user_id}")


def _user_id(handler_input: HandlerInput) -> str:
    envelope = handler_input.request_envelope
    if envelope.session is not None and envelope.session.user.userId:
        return envelope.session.user.userId
    return envelope.context.System.user.userId


class PersistentAttributesLoader(RequestInterceptor):
    """Load the user's persistent attributes onto the handler input."""

    def __init__(self, adapter: DynamoDbPersistenceAdapter) -> None:
        self.adapter = adapter

    def process(self, handler_input: HandlerInput) -> None:
        user_id = _user_id(handler_input)
        if not user_id:
            handler_input.persistent_attributes = {}
            return
        handler_input.persistent_attributes = self.adapter.get_attributes(user_id)


class PersistentAttributesSaver(ResponseInterceptor):
    """Save the handler input's persistent attributes after the handler ran."""

    def __init__(self, adapter: DynamoDbPersistenceAdapter) -> None:
        self.adapter = adapter

    def process(self, handler_input: HandlerInput, response: ResponseEnvelope | None) -> None:
        user_id = _user_id(handler_input)
        if not user_id or handler_input.persistent_attributes is None:
            return
        self.adapter.save_attributes(user_id, handler_input.persistent_attributes)
