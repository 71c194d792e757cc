"""Storage for blog user accounts.

Two implementations share the UserRepository interface: an in-memory store
for single-instance/local development and a DynamoDB store for deployments.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, List, Tuple
import logging
import os

from .models import UserRecord, UserRole

logger = logging.getLogger(__name__)


class UserRepository(ABC):
    """Abstract interface for user account storage."""

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by id, or None if it does not exist."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by email (case-insensitive), or None."""

    @abstractmethod
    async def create_user(self, user: UserRecord) -> UserRecord:
        """Create a new user record. Raises ValueError if the id is taken."""

    @abstractmethod
    async def update_user(self, user: UserRecord) -> UserRecord:
        """Replace an existing user record."""

    @abstractmethod
    async def delete_user(self, user_id: str) -> bool:
        """Delete a user. Returns False if there was nothing to delete."""

    @abstractmethod
    async def list_users(self, offset: int = 0, limit: int = 20) -> Tuple[List[UserRecord], int]:
        """
        List users ordered by name.

        Returns:
            Tuple of (page of users, total user count)
        """


def _sort_key(user: UserRecord) -> Tuple[str, str]:
    return user.name.lower(), user.user_id


class InMemoryUserRepository(UserRepository):
    """In-memory user storage (for single-instance/local development)."""

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        email = email.strip().lower()
        for user in self._users.values():
            if user.email == email:
                return user.model_copy()
        return None

    async def create_user(self, user: UserRecord) -> UserRecord:
        if user.user_id in self._users:
            raise ValueError(f"User {user.user_id} already exists")
        self._users[user.user_id] = user.model_copy()
        logger.info(f"Created new user: {user.user_id} ({user.email})")
        return user

    async def update_user(self, user: UserRecord) -> UserRecord:
        if user.user_id not in self._users:
            raise ValueError(f"User {user.user_id} does not exist")
        self._users[user.user_id] = user.model_copy()
        logger.debug(f"Updated user: {user.user_id}")
        return user

    async def delete_user(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    async def list_users(self, offset: int = 0, limit: int = 20) -> Tuple[List[UserRecord], int]:
        users = sorted(self._users.values(), key=_sort_key)
        page = [u.model_copy() for u in users[offset:offset + limit]]
        return page, len(users)


class DynamoDBUserRepository(UserRepository):
    """DynamoDB repository for user accounts.

    Table Schema:
        PK: USER#<user_id>
        SK: PROFILE

    GSIs:
        EmailIndex: userEmail (for exact email lookup)
    """

    def __init__(self, table_name: Optional[str] = None, region: Optional[str] = None):
        """Initialize repository with table name from env or parameter."""
        import boto3
        from botocore.exceptions import ClientError

        self._table_name = table_name or os.getenv("DYNAMODB_USERS_TABLE_NAME", "")
        if not self._table_name:
            raise ValueError("DYNAMODB_USERS_TABLE_NAME is required for DynamoDBUserRepository")

        self.region = region or os.getenv('AWS_REGION', os.getenv('AWS_DEFAULT_REGION', 'us-west-2'))

        profile = os.getenv('AWS_PROFILE')
        if profile:
            session = boto3.Session(profile_name=profile)
            self.dynamodb = session.resource('dynamodb', region_name=self.region)
        else:
            self.dynamodb = boto3.resource('dynamodb', region_name=self.region)

        self.table = self.dynamodb.Table(self._table_name)
        self._client_error = ClientError
        logger.info(f"DynamoDBUserRepository initialized with table: {self._table_name}")

    # ========== Single User Operations ==========

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        try:
            response = self.table.get_item(
                Key={
                    "PK": f"USER#{user_id}",
                    "SK": "PROFILE"
                }
            )
        except self._client_error as e:
            logger.error(f"Error getting user {user_id}: {e}")
            raise

        if 'Item' not in response:
            return None
        return self._item_to_user(response['Item'])

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            response = self.table.query(
                IndexName="EmailIndex",
                KeyConditionExpression="userEmail = :email",
                ExpressionAttributeValues={
                    ":email": email.strip().lower()
                },
                Limit=1
            )
        except self._client_error as e:
            logger.error(f"Error getting user by email {email}: {e}")
            raise

        items = response.get("Items", [])
        if not items:
            return None
        return self._item_to_user(items[0])

    async def create_user(self, user: UserRecord) -> UserRecord:
        try:
            self.table.put_item(
                Item=self._user_to_item(user),
                ConditionExpression="attribute_not_exists(PK)"
            )
        except self._client_error as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ValueError(f"User {user.user_id} already exists")
            logger.error(f"Error creating user: {e}")
            raise

        logger.info(f"Created new user: {user.user_id} ({user.email})")
        return user

    async def update_user(self, user: UserRecord) -> UserRecord:
        try:
            self.table.put_item(
                Item=self._user_to_item(user),
                ConditionExpression="attribute_exists(PK)"
            )
        except self._client_error as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ValueError(f"User {user.user_id} does not exist")
            logger.error(f"Error updating user {user.user_id}: {e}")
            raise

        logger.debug(f"Updated user: {user.user_id}")
        return user

    async def delete_user(self, user_id: str) -> bool:
        try:
            response = self.table.delete_item(
                Key={
                    "PK": f"USER#{user_id}",
                    "SK": "PROFILE"
                },
                ReturnValues="ALL_OLD"
            )
        except self._client_error as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            raise

        return 'Attributes' in response

    # ========== List Operations ==========

    async def list_users(self, offset: int = 0, limit: int = 20) -> Tuple[List[UserRecord], int]:
        """
        List users ordered by name.

        A blog has few accounts, so the whole PROFILE set is scanned and
        sliced in memory.
        """
        users: List[UserRecord] = []
        kwargs = {
            "FilterExpression": "SK = :sk",
            "ExpressionAttributeValues": {":sk": "PROFILE"},
        }

        try:
            while True:
                response = self.table.scan(**kwargs)
                users.extend(self._item_to_user(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except self._client_error as e:
            logger.error(f"Error listing users: {e}")
            raise

        users.sort(key=_sort_key)
        return users[offset:offset + limit], len(users)

    # ========== Helper Methods ==========

    def _user_to_item(self, user: UserRecord) -> dict:
        """Convert UserRecord to DynamoDB item with all keys."""
        item = {
            "PK": f"USER#{user.user_id}",
            "SK": "PROFILE",
            "oId": user.user_id,
            "userName": user.name,
            "userEmail": user.email,
            "userRole": user.role.value,
            "userURL": user.url,
            "userAvatar": user.avatar,
        }

        if user.created_at:
            item["createdAt"] = user.created_at
        if user.updated_at:
            item["updatedAt"] = user.updated_at

        return item

    def _item_to_user(self, item: dict) -> UserRecord:
        """Convert DynamoDB item to UserRecord."""
        return UserRecord(
            user_id=item["oId"],
            name=item.get("userName", ""),
            email=item.get("userEmail", ""),
            role=item.get("userRole", UserRole.DEFAULT.value),
            url=item.get("userURL", ""),
            avatar=item.get("userAvatar", ""),
            created_at=item.get("createdAt"),
            updated_at=item.get("updatedAt")
        )


def create_user_repository() -> UserRepository:
    """
    Create the user repository for the current environment.

    Uses DynamoDB when DYNAMODB_USERS_TABLE_NAME is set, otherwise an
    in-memory store.
    """
    if os.getenv("DYNAMODB_USERS_TABLE_NAME"):
        return DynamoDBUserRepository()

    logger.warning("DYNAMODB_USERS_TABLE_NAME not set - using in-memory user storage")
    return InMemoryUserRepository()
