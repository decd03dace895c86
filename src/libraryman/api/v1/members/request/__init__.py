"""Member Request Models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from libraryman.domain.models import MemberRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class MemberCreateRequest(BaseModel):
    """
    Request to open a member account.

    Attributes:
        member_id: Explicit id, or None to let the store assign one
        role: Account role
        name: Display name
        username: Login name
        email: Contact address
        password: Plaintext password, hashed before it reaches the service
        membership_date: Account opening date, defaults to now
    """

    member_id: int | None = Field(None, description="Member id (store-assigned when omitted)", gt=0)
    role: MemberRole = Field(MemberRole.USER, description="Account role")
    name: str = Field(..., description="Display name", min_length=1, max_length=128)
    username: str = Field(
        ...,
        description="Login name",
        min_length=3,
        max_length=64,
        pattern=r"^[a-zA-Z0-9._\-]+$",
    )
    email: str = Field(..., description="Contact address", pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., description="Plaintext password", min_length=8, max_length=128)
    membership_date: datetime | None = Field(None, description="Account opening date")


class NewMember(BaseModel):
    """
    Account creation payload as seen by the member service.

    The only transfer shape that carries a credential: ``password_hash`` is
    already hashed by the HTTP edge.
    """

    model_config = ConfigDict(frozen=True)

    member_id: int | None = None
    role: MemberRole
    name: str
    username: str
    email: str
    password_hash: str
    membership_date: datetime | None = None


class UpdateMemberRequest(BaseModel):
    """
    Profile update. Role, password, id and membership date are not editable here.

    Attributes:
        name: New display name
        username: New login name
        email: New contact address
    """

    name: str = Field(..., description="Display name", min_length=1, max_length=128)
    username: str = Field(
        ...,
        description="Login name",
        min_length=3,
        max_length=64,
        pattern=r"^[a-zA-Z0-9._\-]+$",
    )
    email: str = Field(..., description="Contact address", pattern=EMAIL_PATTERN, max_length=254)


class PasswordChangeRequest(BaseModel):
    """
    Password change with verification of the current password.

    Both values are transient and never persisted in plaintext.
    """

    current_password: str = Field(..., description="Current password", min_length=1, max_length=128)
    new_password: str = Field(..., description="New password", min_length=8, max_length=128)
