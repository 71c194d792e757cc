"""Role assignment for newly created users."""

from dataclasses import dataclass
from typing import Optional

from users.models import UserRole

NOT_ALLOW_REGISTER_LABEL = "notAllowRegisterLabel"


@dataclass(frozen=True)
class RoleDecision:
    """Outcome of decide_role: either an assigned role or a rejection reason (label key)."""
    allowed: bool
    role: Optional[UserRole] = None
    reason: Optional[str] = None


def decide_role(is_admin: bool, allow_register: bool) -> RoleDecision:
    """
    Decide which role a new user gets and whether creation is permitted.

    An administrator always creates users who can post (defaultRole). Anyone
    else is self-registering: refused while registration is closed, otherwise
    the new account is a visitor that cannot post.
    """
    if is_admin:
        return RoleDecision(allowed=True, role=UserRole.DEFAULT)

    if not allow_register:
        return RoleDecision(allowed=False, reason=NOT_ALLOW_REGISTER_LABEL)

    return RoleDecision(allowed=True, role=UserRole.VISITOR)
