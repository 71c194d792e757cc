"""Console handlers for user administration.

Each method handles one request: it delegates to the user, preference and
label collaborators and maps the outcome onto the console envelope
({sc, msg, ...}). Collaborator failures arrive as ServiceError.
"""

import html
import logging
from typing import Optional

from apis.shared.auth import User, is_admin
from apis.shared.errors import ServiceError
from apis.shared.lang import LangPropsService
from apis.shared.pagination import PaginationRequest
from preferences.service import PreferenceQueryService
from users.models import ROLE_NAME_LABELS, AddUserRequest, UpdateUserRequest, UserRecord
from users.service import UserMgmtService, UserQueryService

from .models import (
    AddUserResponse,
    ConsoleResponse,
    ConsoleUser,
    UserListResponse,
    UserResponse,
)
from .registration import decide_role

logger = logging.getLogger(__name__)


def _actor_id(actor: Optional[User]) -> str:
    return actor.user_id if actor else "anonymous"


class UserConsoleService:
    """Request handlers behind the /console user endpoints."""

    def __init__(
        self,
        user_query: UserQueryService,
        user_mgmt: UserMgmtService,
        preference_query: PreferenceQueryService,
        lang: LangPropsService
    ):
        self._user_query = user_query
        self._user_mgmt = user_mgmt
        self._preference_query = preference_query
        self._lang = lang

    def _to_console_user(self, user: UserRecord, escape_name: bool = False) -> ConsoleUser:
        name = html.escape(user.name, quote=True) if escape_name else user.name
        return ConsoleUser(
            user_id=user.user_id,
            name=name,
            email=user.email,
            role=user.role.value,
            url=user.url,
            avatar=user.avatar,
            role_name=self._lang.get(ROLE_NAME_LABELS[user.role])
        )

    async def add_user(self, request: AddUserRequest, actor: Optional[User]) -> AddUserResponse:
        """
        Create a user.

        The role is never taken from the request: administrators create
        defaultRole users, anyone else self-registers as a visitor, and only
        while the preference allows registration.
        """
        try:
            admin = is_admin(actor)
            allow_register = False
            if not admin:
                allow_register = (await self._preference_query.get_preference()).allow_register

            decision = decide_role(admin, allow_register)
            if not decision.allowed:
                logger.info(f"Registration refused for {request.email}: registration is closed")
                return AddUserResponse(sc=False, msg=self._lang.get(decision.reason))

            user_id = await self._user_mgmt.add_user(request.model_copy(update={"role": decision.role}))
        except ServiceError as e:
            logger.error(f"Add user failed (actor={_actor_id(actor)}): {e.message}", exc_info=True)
            return AddUserResponse(sc=False, msg=e.message)

        logger.info(f"User {user_id} added by {_actor_id(actor)} with role {decision.role.value}")
        return AddUserResponse(sc=True, o_id=user_id, msg=self._lang.get("addSuccLabel"))

    async def update_user(self, request: UpdateUserRequest, actor: User) -> ConsoleResponse:
        """Update a user. Failures surface the service error message."""
        try:
            await self._user_mgmt.update_user(request)
        except ServiceError as e:
            logger.error(f"Update user {request.user_id} failed (actor={actor.user_id}): {e.message}", exc_info=True)
            return ConsoleResponse(sc=False, msg=e.message)

        return ConsoleResponse(sc=True, msg=self._lang.get("updateSuccLabel"))

    async def remove_user(self, user_id: str, actor: User) -> ConsoleResponse:
        """Remove a user. Failures report a fixed label, never the error detail."""
        try:
            await self._user_mgmt.remove_user(user_id)
        except ServiceError as e:
            logger.error(f"Remove user {user_id} failed (actor={actor.user_id}): {e.message}", exc_info=True)
            return ConsoleResponse(sc=False, msg=self._lang.get("removeFailLabel"))

        logger.info(f"User {user_id} removed by {actor.user_id}")
        return ConsoleResponse(sc=True, msg=self._lang.get("removeSuccLabel"))

    async def get_users(self, request: PaginationRequest, actor: User) -> UserListResponse:
        """List a page of users with names escaped for embedding in markup."""
        try:
            page = await self._user_query.get_users(request)
        except ServiceError as e:
            logger.error(f"List users failed (actor={actor.user_id}): {e.message}", exc_info=True)
            return UserListResponse(sc=False, msg=self._lang.get("getFailLabel"))

        return UserListResponse(
            sc=True,
            users=[self._to_console_user(u, escape_name=True) for u in page.users],
            pagination=page.pagination
        )

    async def get_user(self, user_id: str, actor: User) -> UserResponse:
        """Get a user. A missing user is a soft failure, not an error."""
        user = await self._user_query.get_user(user_id)
        if user is None:
            logger.debug(f"User {user_id} not found (actor={actor.user_id})")
            return UserResponse(sc=False, msg=self._lang.get("getFailLabel"))

        return UserResponse(sc=True, user=self._to_console_user(user))

    async def change_user_role(self, user_id: str, actor: User) -> ConsoleResponse:
        """Toggle a user's role. Failures report a fixed label, never the error detail."""
        try:
            await self._user_mgmt.change_role(user_id)
        except ServiceError as e:
            logger.error(f"Change role of user {user_id} failed (actor={actor.user_id}): {e.message}", exc_info=True)
            return ConsoleResponse(sc=False, msg=self._lang.get("removeFailLabel"))

        return ConsoleResponse(sc=True, msg=self._lang.get("updateSuccLabel"))
