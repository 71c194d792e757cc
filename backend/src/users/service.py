"""User query and management services."""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from apis.shared.errors import ErrorCode, ServiceError
from apis.shared.lang import LangPropsService
from apis.shared.pagination import Pagination, PaginationRequest, count_pages, paginate
from preferences.service import PreferenceQueryService

from .models import AddUserRequest, UpdateUserRequest, UserRecord, UserRole
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_USER_NAME_LENGTH = 1
MAX_USER_NAME_LENGTH = 20

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class UserPage(BaseModel):
    """One page of users plus pager metadata."""

    users: List[UserRecord]
    pagination: Pagination


class UserQueryService:
    """Read-only user lookups."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        """
        Get a user by id.

        Returns None when the user does not exist or cannot be loaded; callers
        treat both as "not found".
        """
        try:
            return await self._repository.get_user(user_id)
        except Exception as e:
            logger.error(f"Failed to load user {user_id}: {e}", exc_info=True)
            return None

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by email, or None."""
        try:
            return await self._repository.get_user_by_email(email)
        except Exception as e:
            logger.error(f"Failed to load user by email {email}: {e}", exc_info=True)
            return None

    async def get_users(self, request: PaginationRequest) -> UserPage:
        """
        Get one page of users ordered by name.

        Raises:
            ServiceError: if the user store cannot be read
        """
        offset = (request.current_page_num - 1) * request.page_size
        try:
            users, total = await self._repository.list_users(offset=offset, limit=request.page_size)
        except Exception as e:
            logger.error(f"Failed to list users: {e}", exc_info=True)
            raise ServiceError("Failed to list users", ErrorCode.SERVICE_UNAVAILABLE, detail=str(e))

        pages = count_pages(total, request.page_size)
        return UserPage(
            users=users,
            pagination=Pagination(
                page_count=pages,
                page_nums=paginate(request.current_page_num, pages, request.window_size)
            )
        )


class UserMgmtService:
    """User account mutations.

    Validation failures raise ServiceError with an already-resolved label as
    the message, so handlers can show it directly.
    """

    def __init__(
        self,
        repository: UserRepository,
        preference_query: PreferenceQueryService,
        lang: LangPropsService
    ):
        self._repository = repository
        self._preference_query = preference_query
        self._lang = lang

    def _error(self, label: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> ServiceError:
        return ServiceError(self._lang.get(label), code)

    def _validate(self, name: str, email: str) -> None:
        if not EMAIL_PATTERN.match(email):
            raise self._error("mailInvalidLabel")
        if not MIN_USER_NAME_LENGTH <= len(name) <= MAX_USER_NAME_LENGTH:
            raise self._error("userNameInvalidLabel")

    async def add_user(self, request: AddUserRequest) -> str:
        """
        Create a user and return its id.

        Missing optional fields default to: role defaultRole, URL the blog's
        serve path, empty avatar.

        Raises:
            ServiceError: on invalid input, duplicate email or storage failure
        """
        name = request.name.strip()
        email = request.email.strip().lower()
        self._validate(name, email)

        try:
            if await self._repository.get_user_by_email(email):
                raise self._error("duplicatedEmailLabel", ErrorCode.CONFLICT)

            url = (request.url or "").strip()
            if not url:
                url = (await self._preference_query.get_preference()).serve_path

            now = _now()
            user = UserRecord(
                user_id=uuid.uuid4().hex,
                name=name,
                email=email,
                role=request.role or UserRole.DEFAULT,
                url=url,
                avatar=(request.avatar or "").strip(),
                created_at=now,
                updated_at=now
            )
            await self._repository.create_user(user)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to add user {email}: {e}", exc_info=True)
            raise ServiceError(str(e), ErrorCode.INTERNAL_ERROR)

        return user.user_id

    async def update_user(self, request: UpdateUserRequest) -> None:
        """
        Update a user's name, email and, when supplied, role, URL and avatar.

        Raises:
            ServiceError: if the user is unknown, input is invalid, the new
                email belongs to another user, or storage fails
        """
        name = request.name.strip()
        email = request.email.strip().lower()

        try:
            user = await self._repository.get_user(request.user_id)
            if user is None:
                raise self._error("updateFailLabel", ErrorCode.NOT_FOUND)

            self._validate(name, email)

            if email != user.email:
                other = await self._repository.get_user_by_email(email)
                if other and other.user_id != user.user_id:
                    raise self._error("duplicatedEmailLabel", ErrorCode.CONFLICT)

            user.name = name
            user.email = email
            if request.role is not None:
                user.role = request.role
            if request.url is not None:
                user.url = request.url.strip()
            if request.avatar is not None:
                user.avatar = request.avatar.strip()
            user.updated_at = _now()

            await self._repository.update_user(user)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to update user {request.user_id}: {e}", exc_info=True)
            raise ServiceError(str(e), ErrorCode.INTERNAL_ERROR)

    async def remove_user(self, user_id: str) -> None:
        """
        Remove a user.

        Raises:
            ServiceError: if the user does not exist or storage fails
        """
        try:
            removed = await self._repository.delete_user(user_id)
        except Exception as e:
            logger.error(f"Failed to remove user {user_id}: {e}", exc_info=True)
            raise ServiceError(str(e), ErrorCode.INTERNAL_ERROR)

        if not removed:
            raise self._error("removeFailLabel", ErrorCode.NOT_FOUND)

    async def change_role(self, user_id: str) -> UserRole:
        """
        Toggle a user between defaultRole and visitorRole.

        Returns:
            The user's new role

        Raises:
            ServiceError: if the user is unknown, is an administrator, or
                storage fails
        """
        try:
            user = await self._repository.get_user(user_id)
            if user is None:
                raise self._error("updateFailLabel", ErrorCode.NOT_FOUND)
            if user.role == UserRole.ADMIN:
                raise self._error("changeAdminRoleLabel", ErrorCode.FORBIDDEN)

            user.role = UserRole.VISITOR if user.role == UserRole.DEFAULT else UserRole.DEFAULT
            user.updated_at = _now()
            await self._repository.update_user(user)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to change role of user {user_id}: {e}", exc_info=True)
            raise ServiceError(str(e), ErrorCode.INTERNAL_ERROR)

        logger.info(f"Changed role of user {user_id} to {user.role.value}")
        return user.role
