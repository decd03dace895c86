"""
Member API endpoints.

Handles listing, lookup, creation, profile update, deletion and password
change of member accounts. Domain errors raised by MemberService are turned
into Problem Details responses by the registered exception handler.
"""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status

from libraryman.api.v1.members.request import (
    MemberCreateRequest,
    NewMember,
    PasswordChangeRequest,
    UpdateMemberRequest,
)
from libraryman.api.v1.members.response import (
    MemberPage,
    MemberView,
    MessageResponse,
)
from libraryman.api.v1.members.services import MEMBER_NOT_FOUND
from libraryman.di import MemberServiceDep, PasswordVerifierDep
from libraryman.domain.models import PageRequest

router = APIRouter()


@router.get(
    "",
    response_model=MemberPage,
    summary="List members",
    description="""
    Retrieve a page of members.

    `sort_by` accepts any member property: member_id, role, name, username,
    email, membership_date. Any other value is rejected with 400.
    """,
)
async def list_members(
    service: MemberServiceDep,
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(5, ge=1, le=100, description="Page size"),
    sort_by: str = Query("member_id", description="Member property to sort by"),
    sort_dir: Literal["asc", "desc"] = Query("asc", description="Sort direction"),
) -> MemberPage:
    """
    List members.

    Args:
        service: Member service (injected)
        page: Page number
        size: Page size
        sort_by: Sort property
        sort_dir: Sort direction

    Returns:
        One page of members
    """
    result = await service.list_members(
        PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )
    return MemberPage(
        content=result.content,
        page=result.page,
        size=result.size,
        total_elements=result.total_elements,
        total_pages=result.total_pages,
    )


@router.get(
    "/{member_id}",
    response_model=MemberView,
    summary="Get a member",
)
async def get_member(member_id: int, service: MemberServiceDep) -> MemberView:
    """
    Get a member by id.

    Raises:
        HTTPException: 404 if no member has this id
    """
    member = await service.get_member_by_id(member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBER_NOT_FOUND)
    return member


@router.post(
    "",
    response_model=MemberView,
    status_code=status.HTTP_201_CREATED,
    summary="Create a member",
    description="""
    Open a member account.

    The password is hashed before the account reaches the member service
    and is never returned by any endpoint.
    """,
)
async def add_member(
    request: MemberCreateRequest,
    service: MemberServiceDep,
    passwords: PasswordVerifierDep,
) -> MemberView:
    """
    Create a member.

    Args:
        request: Account details with plaintext password
        service: Member service (injected)
        passwords: Password hashing (injected)

    Returns:
        The stored member
    """
    new_member = NewMember(
        member_id=request.member_id,
        role=request.role,
        name=request.name,
        username=request.username,
        email=request.email,
        password_hash=passwords.hash(request.password),
        membership_date=request.membership_date,
    )
    return await service.add_member(new_member)


@router.put(
    "/{member_id}",
    response_model=MemberView,
    summary="Update member details",
)
async def update_member(
    member_id: int,
    request: UpdateMemberRequest,
    service: MemberServiceDep,
) -> MemberView:
    """Replace name, username and email of a member."""
    return await service.update_member(member_id, request)


@router.delete(
    "/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a member",
    description="""
    Delete a member account.

    Rejected with 409 while the member has unpaid fines or borrowed books.
    """,
)
async def delete_member(member_id: int, service: MemberServiceDep) -> Response:
    """Delete a member."""
    await service.delete_member(member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{member_id}/password",
    response_model=MessageResponse,
    summary="Change a member's password",
)
async def update_password(
    member_id: int,
    request: PasswordChangeRequest,
    service: MemberServiceDep,
) -> MessageResponse:
    """Change a password after verifying the current one."""
    await service.update_password(member_id, request)
    return MessageResponse(message="Password updated successfully")
