"""Role-based access control utilities."""

import os
from typing import Callable, List, Optional
from fastapi import Depends, HTTPException, status
import logging

from .dependencies import get_current_user
from .models import User

logger = logging.getLogger(__name__)


def admin_roles() -> List[str]:
    """Roles that grant console administrator access (CONSOLE_ADMIN_ROLES)."""
    raw = os.getenv('CONSOLE_ADMIN_ROLES', 'adminRole')
    return [role.strip() for role in raw.split(',') if role.strip()]


def require_roles(*required_roles: str) -> Callable:
    """
    Create a dependency that requires the user to have at least one of the specified roles.

    If the user doesn't have any of the required roles, a 403 Forbidden
    response is returned before the endpoint body runs.

    Usage:
        @router.delete("/user/{user_id}")
        async def remove(user: User = Depends(require_roles("adminRole"))):
            ...

    Args:
        *required_roles: One or more role names that grant access (OR logic)

    Returns:
        A FastAPI dependency function that validates roles and returns the User object
    """
    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if not user.roles:
            logger.warning(f"User {user.email} has no assigned roles, denying access")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User has no assigned roles."
            )

        if not has_any_role(user, *required_roles):
            logger.warning(
                f"User {user.email} (roles: {user.roles}) lacks required roles: {required_roles}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(required_roles)}"
            )

        logger.debug(f"User {user.email} authorized with roles: {user.roles}")
        return user

    return role_checker


def has_any_role(user: User, *roles: str) -> bool:
    """
    Check if a user has any of the specified roles.

    Useful for conditional logic within route handlers without raising exceptions.
    """
    if not user.roles:
        return False
    return any(role in user.roles for role in roles)


def is_admin(user: Optional[User]) -> bool:
    """True when the (possibly anonymous) caller is a console administrator."""
    if user is None:
        return False
    return has_any_role(user, *admin_roles())


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Console admin gate: 401 without credentials, 403 without an admin role."""
    checker = require_roles(*admin_roles())
    return await checker(user)
