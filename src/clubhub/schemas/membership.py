from typing import Literal, Optional

from pydantic import BaseModel

MembershipAction = Literal["approve", "reject", "remove"]


class MembershipInfo(BaseModel):
    id: str
    club_id: str
    user_id: str
    role_id: Optional[str] = None
    status: str
    requested_at: str
    responded_at: Optional[str] = None


class MembershipRequestInfo(BaseModel):
    """A pending join request with requester details."""

    id: str
    user_id: str
    full_name: str
    email: str
    club_id: str
    club_name: str
    requested_at: str
    has_president: bool = False
