"""Identity schema definitions.

This module defines the request/response models for authentication and the
``Principal`` tagged union that represents the resolved caller.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class AdminPrincipal(BaseModel):
    """An authenticated platform administrator."""

    kind: Literal["admin"] = "admin"
    user_id: str = Field(description="Account id of the admin.")
    admin_id: str = Field(description="Primary key of the admin record.")
    full_name: str
    school_name: str
    email: str


class ProfilePrincipal(BaseModel):
    """An authenticated student (or club president) profile."""

    kind: Literal["profile"] = "profile"
    user_id: str = Field(description="Account id, equal to the profile id.")
    full_name: str
    email: str


Principal = Annotated[
    Union[AdminPrincipal, ProfilePrincipal], Field(discriminator="kind")
]


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, description="Login email.")
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)


class AdminRegisterRequest(RegisterRequest):
    school_name: str = Field(min_length=1)
    admin_token: Optional[str] = Field(
        default=None,
        description="Required when the server has ADMIN_TOKEN configured.",
    )


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    principal: Principal


class CurrentPrincipalResponse(BaseModel):
    principal: Optional[Union[AdminPrincipal, ProfilePrincipal]] = Field(
        default=None,
        description="None when the account has neither an admin nor a profile record.",
    )


class UserDirectoryEntry(BaseModel):
    """A profile as listed in the admin user directory."""

    id: str
    full_name: str
    email: str
    is_president: bool = False
    is_admin: bool = False
