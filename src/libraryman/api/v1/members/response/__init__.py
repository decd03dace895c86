"""Member Response Models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from libraryman.domain.models import MemberRole


class MemberView(BaseModel):
    """
    Member as exposed across the API boundary.

    Deliberately has no password field; see ``NewMember`` for the one
    shape that carries a credential.
    """

    model_config = ConfigDict(frozen=True)

    member_id: int = Field(..., description="Member id")
    role: MemberRole = Field(..., description="Account role")
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Login name")
    email: str = Field(..., description="Contact address")
    membership_date: datetime = Field(..., description="Account opening date (UTC)")


class MemberPage(BaseModel):
    """One page of members."""

    content: list[MemberView]
    page: int = Field(..., description="Zero-based page number")
    size: int = Field(..., description="Requested page size")
    total_elements: int = Field(..., description="Members across all pages")
    total_pages: int = Field(..., description="Number of pages")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
