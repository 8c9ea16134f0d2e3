"""Club schema definitions."""

from typing import List, Optional

from pydantic import BaseModel, Field

from clubhub.config import DEFAULT_CLUB_CATEGORY


class CreateClubRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    category: str = DEFAULT_CLUB_CATEGORY


class UpdateClubRequest(BaseModel):
    """Partial update; omitted fields keep their value."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None


class AssignPresidentRequest(BaseModel):
    profile_id: str = Field(description="Profile to appoint as president.")


class PresidentSummary(BaseModel):
    id: str
    full_name: str
    email: str


class AdminClubInfo(BaseModel):
    """A club as shown in the admin console."""

    id: str
    name: str
    description: str
    category: str
    member_count: int = 0
    president: Optional[PresidentSummary] = None
    status: str = Field(description="'active' or 'needs_president'.")


class DirectoryClubInfo(BaseModel):
    """A club as shown in the student directory."""

    id: str
    name: str
    description: str
    category: str
    president_id: Optional[str] = None
    president_name: Optional[str] = None
    member_count: int = 0
    membership_status: Optional[str] = Field(
        default=None,
        description="The caller's membership status, None when never requested.",
    )


class ClubSummary(BaseModel):
    id: str
    name: str
    description: str
    category: str


class RosterEntry(BaseModel):
    """An accepted member of a club."""

    id: str = Field(description="Profile id.")
    membership_id: Optional[str] = None
    full_name: str
    email: str = ""
    role_id: Optional[str] = None
    role_name: str
    joined_at: Optional[str] = None


class ClubRoleInfo(BaseModel):
    id: str
    club_id: str
    name: str
    permissions: List[str] = Field(default_factory=list)


class CreateRoleRequest(BaseModel):
    name: str = Field(min_length=1)
    permissions: List[str] = Field(default_factory=list)


class AssignRoleRequest(BaseModel):
    role_id: Optional[str] = Field(
        default=None, description="Role to assign; null clears the role."
    )
