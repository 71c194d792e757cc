"""Console API routes for blog user management."""

from functools import lru_cache
from typing import Optional
import logging

from fastapi import APIRouter, Depends

from apis.shared.auth import User, get_optional_user, require_admin
from apis.shared.lang import LangPropsService
from apis.shared.pagination import build_pagination_request
from preferences.repository import PreferenceRepository, create_preference_repository
from preferences.service import PreferenceQueryService
from users.models import AddUserRequest, UpdateUserRequest
from users.repository import UserRepository, create_user_repository
from users.service import UserMgmtService, UserQueryService

from .models import AddUserResponse, ConsoleResponse, UserListResponse, UserResponse
from .service import UserConsoleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/console", tags=["console-users"])


# ========== Dependencies ==========

@lru_cache
def get_user_repository() -> UserRepository:
    """Get the process-wide user repository."""
    return create_user_repository()


@lru_cache
def get_preference_repository() -> PreferenceRepository:
    """Get the process-wide preference repository."""
    return create_preference_repository()


@lru_cache
def get_lang_service() -> LangPropsService:
    """Get label lookup for the configured locale."""
    return LangPropsService()


def get_preference_query_service(
    repo: PreferenceRepository = Depends(get_preference_repository)
) -> PreferenceQueryService:
    """Get preference query service instance."""
    return PreferenceQueryService(repository=repo)


def get_user_query_service(
    repo: UserRepository = Depends(get_user_repository)
) -> UserQueryService:
    """Get user query service instance."""
    return UserQueryService(repository=repo)


def get_user_mgmt_service(
    repo: UserRepository = Depends(get_user_repository),
    preference_query: PreferenceQueryService = Depends(get_preference_query_service),
    lang: LangPropsService = Depends(get_lang_service)
) -> UserMgmtService:
    """Get user management service instance."""
    return UserMgmtService(repository=repo, preference_query=preference_query, lang=lang)


def get_user_console_service(
    user_query: UserQueryService = Depends(get_user_query_service),
    user_mgmt: UserMgmtService = Depends(get_user_mgmt_service),
    preference_query: PreferenceQueryService = Depends(get_preference_query_service),
    lang: LangPropsService = Depends(get_lang_service)
) -> UserConsoleService:
    """Get user console service instance."""
    return UserConsoleService(
        user_query=user_query,
        user_mgmt=user_mgmt,
        preference_query=preference_query,
        lang=lang
    )


# ========== Routes ==========

@router.post("/users", response_model=AddUserResponse, response_model_exclude_none=True)
async def add_user(
    request: AddUserRequest,
    actor: Optional[User] = Depends(get_optional_user),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """
    Add a user.

    Open to anonymous callers: without an admin token this is
    self-registration, allowed only when the blog preference permits it.
    Any userRole in the body is ignored.
    """
    logger.info(f"POST /console/users - actor: {actor.user_id if actor else 'anonymous'}")
    return await service.add_user(request, actor)


@router.put("/user", response_model=ConsoleResponse, response_model_exclude_none=True)
async def update_user(
    request: UpdateUserRequest,
    admin_user: User = Depends(require_admin),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """Update a user's name, email, role, URL and avatar (admin only)."""
    logger.info(f"Admin {admin_user.user_id} updating user {request.user_id}")
    return await service.update_user(request, admin_user)


@router.delete("/user/{user_id}", response_model=ConsoleResponse, response_model_exclude_none=True)
async def remove_user(
    user_id: str,
    admin_user: User = Depends(require_admin),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """Remove a user (admin only)."""
    logger.info(f"Admin {admin_user.user_id} removing user {user_id}")
    return await service.remove_user(user_id, admin_user)


@router.get("/users/{pagination_path:path}", response_model=UserListResponse, response_model_exclude_none=True)
async def get_users(
    pagination_path: str,
    admin_user: User = Depends(require_admin),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """
    List users (admin only).

    The path carries the pagination arguments: /console/users/1/10/20 is
    page 1, 10 users per page, a pager window of 20 pages.
    """
    request = build_pagination_request(pagination_path)
    logger.info(
        f"Admin {admin_user.user_id} listing users "
        f"(page={request.current_page_num}, size={request.page_size}, window={request.window_size})"
    )
    return await service.get_users(request, admin_user)


@router.get("/user/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def get_user(
    user_id: str,
    admin_user: User = Depends(require_admin),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """Get a user (admin only). An unknown id yields sc=false, not an HTTP error."""
    logger.info(f"Admin {admin_user.user_id} requesting user {user_id}")
    return await service.get_user(user_id, admin_user)


@router.put("/role/{user_id}", response_model=ConsoleResponse, response_model_exclude_none=True)
async def change_user_role(
    user_id: str,
    admin_user: User = Depends(require_admin),
    service: UserConsoleService = Depends(get_user_console_service)
):
    """Toggle a user between defaultRole and visitorRole (admin only)."""
    logger.info(f"Admin {admin_user.user_id} changing role of user {user_id}")
    return await service.change_user_role(user_id, admin_user)
