"""Shared authentication utilities for API projects."""

from .dependencies import get_current_user, get_optional_user, security
from .jwt_validator import ConsoleJWTValidator, get_validator
from .models import User
from .rbac import (
    admin_roles,
    require_roles,
    has_any_role,
    is_admin,
    require_admin,
)

__all__ = [
    "get_current_user",
    "get_optional_user",
    "security",
    "ConsoleJWTValidator",
    "get_validator",
    "User",
    "admin_roles",
    "require_roles",
    "has_any_role",
    "is_admin",
    "require_admin",
]
