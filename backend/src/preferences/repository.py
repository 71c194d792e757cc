"""Storage for the single blog preference item."""

from abc import ABC, abstractmethod
from typing import Optional
import logging
import os

from .models import Preference

logger = logging.getLogger(__name__)


class PreferenceRepository(ABC):
    """Abstract interface for preference storage."""

    @abstractmethod
    async def get_preference(self) -> Optional[Preference]:
        """Return the stored preference, or None if none has been saved."""

    @abstractmethod
    async def save_preference(self, preference: Preference) -> Preference:
        """Store the preference, replacing any previous one."""


class InMemoryPreferenceRepository(PreferenceRepository):
    """In-memory preference storage (for single-instance/local development)."""

    def __init__(self, preference: Optional[Preference] = None):
        self._preference = preference

    async def get_preference(self) -> Optional[Preference]:
        return self._preference.model_copy() if self._preference else None

    async def save_preference(self, preference: Preference) -> Preference:
        self._preference = preference.model_copy()
        return preference


class DynamoDBPreferenceRepository(PreferenceRepository):
    """DynamoDB preference storage.

    Table Schema:
        PK: PREFERENCE
        SK: PREFERENCE
    """

    def __init__(self, table_name: Optional[str] = None, region: Optional[str] = None):
        import boto3
        from botocore.exceptions import ClientError

        self._table_name = table_name or os.getenv("DYNAMODB_PREFERENCES_TABLE_NAME", "")
        if not self._table_name:
            raise ValueError("DYNAMODB_PREFERENCES_TABLE_NAME is required for DynamoDBPreferenceRepository")

        self.region = region or os.getenv('AWS_REGION', os.getenv('AWS_DEFAULT_REGION', 'us-west-2'))
        self.dynamodb = boto3.resource('dynamodb', region_name=self.region)
        self.table = self.dynamodb.Table(self._table_name)
        self._client_error = ClientError
        logger.info(f"DynamoDBPreferenceRepository initialized with table: {self._table_name}")

    async def get_preference(self) -> Optional[Preference]:
        try:
            response = self.table.get_item(Key={"PK": "PREFERENCE", "SK": "PREFERENCE"})
        except self._client_error as e:
            logger.error(f"Error getting preference: {e}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return Preference.model_validate({k: v for k, v in item.items() if k not in ("PK", "SK")})

    async def save_preference(self, preference: Preference) -> Preference:
        item = {"PK": "PREFERENCE", "SK": "PREFERENCE", **preference.model_dump(by_alias=True)}
        try:
            self.table.put_item(Item=item)
        except self._client_error as e:
            logger.error(f"Error saving preference: {e}")
            raise
        return preference


def create_preference_repository() -> PreferenceRepository:
    """DynamoDB when DYNAMODB_PREFERENCES_TABLE_NAME is set, otherwise in-memory."""
    if os.getenv("DYNAMODB_PREFERENCES_TABLE_NAME"):
        return DynamoDBPreferenceRepository()

    logger.warning("DYNAMODB_PREFERENCES_TABLE_NAME not set - using in-memory preference storage")
    return InMemoryPreferenceRepository()
