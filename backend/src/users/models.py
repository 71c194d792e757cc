"""Domain models for blog user accounts."""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """Blog user role"""
    ADMIN = "adminRole"
    DEFAULT = "defaultRole"    # can post articles
    VISITOR = "visitorRole"    # cannot post articles


ROLE_NAME_LABELS = {
    UserRole.ADMIN: "administratorLabel",
    UserRole.DEFAULT: "commonUserLabel",
    UserRole.VISITOR: "visitorUserLabel",
}


class UserRecord(BaseModel):
    """A blog user account as stored by the user repository."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="oId")
    name: str = Field(..., alias="userName")
    email: str = Field(..., alias="userEmail")
    role: UserRole = Field(UserRole.DEFAULT, alias="userRole")
    url: str = Field("", alias="userURL")
    avatar: str = Field("", alias="userAvatar")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    @field_validator('email', mode='before')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        """Store email as lowercase for case-insensitive matching."""
        return v.strip().lower() if v else v

    @field_validator('role', mode='before')
    @classmethod
    def coerce_role(cls, v) -> UserRole:
        """Convert string to UserRole enum."""
        if isinstance(v, UserRole):
            return v
        if isinstance(v, str):
            return UserRole(v)
        return v


class AddUserRequest(BaseModel):
    """Fields accepted when creating a user."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="userName")
    email: str = Field(..., alias="userEmail")
    url: Optional[str] = Field(None, alias="userURL")
    role: Optional[str] = Field(None, alias="userRole")
    avatar: Optional[str] = Field(None, alias="userAvatar")


class UpdateUserRequest(BaseModel):
    """Fields accepted when updating a user."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="oId")
    name: str = Field(..., alias="userName")
    email: str = Field(..., alias="userEmail")
    role: Optional[UserRole] = Field(None, alias="userRole")
    url: Optional[str] = Field(None, alias="userURL")
    avatar: Optional[str] = Field(None, alias="userAvatar")
