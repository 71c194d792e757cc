"""Unit tests for user repositories."""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from users.models import UserRecord, UserRole
from users.repository import DynamoDBUserRepository, InMemoryUserRepository, create_user_repository


@pytest.fixture
def sample_user():
    return UserRecord(
        user_id="u1",
        name="Alice",
        email="Alice@Example.com",
        role=UserRole.VISITOR,
        url="https://alice.example",
        avatar="",
        created_at="2025-01-01T00:00:00Z"
    )


@pytest.fixture
def dynamo_repo(monkeypatch):
    """DynamoDB repository whose boto3 table is a mock"""
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    with patch("boto3.resource") as resource:
        table = Mock()
        resource.return_value.Table.return_value = table
        repo = DynamoDBUserRepository(table_name="users-test", region="us-west-2")
    return repo, table


def conditional_check_failed():
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "exists"}},
        "PutItem"
    )


class TestInMemoryUserRepository:

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, sample_user):
        repo = InMemoryUserRepository()
        await repo.create_user(sample_user)

        assert (await repo.get_user("u1")).name == "Alice"
        assert (await repo.get_user_by_email(" ALICE@example.com")).user_id == "u1"

    @pytest.mark.asyncio
    async def test_create_duplicate_id(self, sample_user):
        repo = InMemoryUserRepository()
        await repo.create_user(sample_user)

        with pytest.raises(ValueError):
            await repo.create_user(sample_user)

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, sample_user):
        repo = InMemoryUserRepository()
        await repo.create_user(sample_user)

        fetched = await repo.get_user("u1")
        fetched.name = "Changed"

        assert (await repo.get_user("u1")).name == "Alice"

    @pytest.mark.asyncio
    async def test_delete(self, sample_user):
        repo = InMemoryUserRepository()
        await repo.create_user(sample_user)

        assert await repo.delete_user("u1") is True
        assert await repo.delete_user("u1") is False


class TestDynamoDBUserRepository:

    @pytest.mark.asyncio
    async def test_create_writes_item_with_keys(self, dynamo_repo, sample_user):
        repo, table = dynamo_repo

        await repo.create_user(sample_user)

        kwargs = table.put_item.call_args.kwargs
        assert kwargs["ConditionExpression"] == "attribute_not_exists(PK)"
        item = kwargs["Item"]
        assert item["PK"] == "USER#u1"
        assert item["SK"] == "PROFILE"
        assert item["userEmail"] == "alice@example.com"
        assert item["userRole"] == "visitorRole"
        assert "updatedAt" not in item

    @pytest.mark.asyncio
    async def test_create_existing_raises_value_error(self, dynamo_repo, sample_user):
        repo, table = dynamo_repo
        table.put_item.side_effect = conditional_check_failed()

        with pytest.raises(ValueError):
            await repo.create_user(sample_user)

    @pytest.mark.asyncio
    async def test_get_user_maps_item(self, dynamo_repo):
        repo, table = dynamo_repo
        table.get_item.return_value = {
            "Item": {
                "PK": "USER#u1", "SK": "PROFILE", "oId": "u1",
                "userName": "Alice", "userEmail": "alice@example.com", "userRole": "adminRole",
            }
        }

        user = await repo.get_user("u1")

        assert user.role == UserRole.ADMIN
        assert user.url == ""
        table.get_item.assert_called_once_with(Key={"PK": "USER#u1", "SK": "PROFILE"})

    @pytest.mark.asyncio
    async def test_get_user_missing(self, dynamo_repo):
        repo, table = dynamo_repo
        table.get_item.return_value = {}

        assert await repo.get_user("u1") is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_item_existed(self, dynamo_repo):
        repo, table = dynamo_repo
        table.delete_item.return_value = {"Attributes": {"oId": "u1"}}
        assert await repo.delete_user("u1") is True

        table.delete_item.return_value = {}
        assert await repo.delete_user("u1") is False

    @pytest.mark.asyncio
    async def test_list_users_follows_scan_pages(self, dynamo_repo):
        repo, table = dynamo_repo
        table.scan.side_effect = [
            {
                "Items": [{"oId": "u2", "userName": "zed", "userEmail": "z@example.com"}],
                "LastEvaluatedKey": {"PK": "USER#u2", "SK": "PROFILE"},
            },
            {
                "Items": [{"oId": "u1", "userName": "Amy", "userEmail": "a@example.com"}],
            },
        ]

        users, total = await repo.list_users(offset=0, limit=1)

        assert total == 2
        assert [u.user_id for u in users] == ["u1"]
        assert table.scan.call_args_list[1].kwargs["ExclusiveStartKey"] == {"PK": "USER#u2", "SK": "PROFILE"}


def test_factory_defaults_to_in_memory(monkeypatch):
    monkeypatch.delenv("DYNAMODB_USERS_TABLE_NAME", raising=False)

    assert isinstance(create_user_repository(), InMemoryUserRepository)
