"""Tests for member entity and pagination types."""

import pytest

from libraryman.domain.exceptions import (
    DeletionBlockedError,
    LibraryManError,
    ResourceNotFoundError,
)
from libraryman.domain.models import MEMBER_SORT_FIELDS, Page, PageRequest


def test_page_request_defaults():
    """Test the default page is the first five members by id."""
    request = PageRequest()

    assert (request.page, request.size, request.sort_by, request.sort_dir) == (
        0,
        5,
        "member_id",
        "asc",
    )
    assert request.offset == 0


def test_page_request_offset():
    """Test offset is page times size."""
    assert PageRequest(page=3, size=10).offset == 30


@pytest.mark.parametrize(
    ("total", "size", "pages"),
    [(0, 5, 0), (1, 5, 1), (5, 5, 1), (6, 5, 2), (10, 3, 4)],
)
def test_page_total_pages(total, size, pages):
    """Test total_pages rounds up."""
    assert Page(content=[], page=0, size=size, total_elements=total).total_pages == pages


def test_page_map_keeps_totals():
    """Test map transforms content and preserves navigation fields."""
    page = Page(content=[1, 2], page=1, size=2, total_elements=5)

    mapped = page.map(str)

    assert mapped.content == ["1", "2"]
    assert (mapped.page, mapped.size, mapped.total_elements, mapped.total_pages) == (
        1,
        2,
        5,
        3,
    )


def test_password_hash_is_not_sortable():
    """Test only public member properties are sort keys."""
    assert "password_hash" not in MEMBER_SORT_FIELDS
    assert "membership_date" in MEMBER_SORT_FIELDS


def test_domain_errors_carry_status():
    """Test errors expose message and HTTP status."""
    error = DeletionBlockedError("owes")

    assert isinstance(error, LibraryManError)
    assert error.message == "owes"
    assert str(error) == "owes"
    assert error.status_code == 409
    assert ResourceNotFoundError("x").status_code == 404
