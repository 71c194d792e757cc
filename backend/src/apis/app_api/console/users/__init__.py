"""Console users API module for blog account administration."""

from .registration import RoleDecision, decide_role
from .routes import router
from .service import UserConsoleService

__all__ = [
    "router",
    "UserConsoleService",
    "RoleDecision",
    "decide_role",
]
