"""Response models for console user endpoints."""

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from apis.shared.pagination import Pagination


class ConsoleResponse(BaseModel):
    """Uniform console envelope: sc is the success flag, msg a resolved label."""
    model_config = ConfigDict(populate_by_name=True)

    sc: bool
    msg: Optional[str] = None


class AddUserResponse(ConsoleResponse):
    """Result of creating a user."""

    o_id: Optional[str] = Field(None, alias="oId")


class ConsoleUser(BaseModel):
    """User as rendered in the console."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="oId")
    name: str = Field(..., alias="userName")
    email: str = Field(..., alias="userEmail")
    role: str = Field(..., alias="userRole")
    url: str = Field("", alias="userURL")
    avatar: str = Field("", alias="userAvatar")
    role_name: Optional[str] = Field(None, alias="roleName")


class UserResponse(ConsoleResponse):
    """Single user lookup."""

    user: Optional[ConsoleUser] = None


class UserListResponse(ConsoleResponse):
    """Paginated user listing."""

    users: Optional[List[ConsoleUser]] = None
    pagination: Optional[Pagination] = None
