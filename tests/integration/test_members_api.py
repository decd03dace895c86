"""Integration tests for the member endpoints."""

import asyncio
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from libraryman.application import create_app
from libraryman.di import get_infrastructure_factory
from libraryman.infrastructure import InfrastructureFactory
from libraryman.infrastructure.repositories.obligations_repository import (
    Borrowing,
    Fine,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def factory(tmp_path):
    """Local stores in a temporary directory."""
    return InfrastructureFactory(provider="local", base_dir=str(tmp_path))


@pytest.fixture
def client(factory):
    """Test client with lifespan state and temporary stores."""
    app = create_app()
    app.dependency_overrides[get_infrastructure_factory] = lambda: factory
    with TestClient(app) as test_client:
        yield test_client


def _create(client, username="ada", email=None, password="analytical-1", **extra):
    payload = {
        "name": username.title(),
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
        **extra,
    }
    return client.post("/api/members", json=payload)


def test_create_member(client):
    """Test creation returns 201 with the stored member and no credential."""
    response = _create(client)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["member_id"] == 1
    assert data["role"] == "USER"
    assert data["membership_date"] is not None
    assert "password" not in data
    assert "password_hash" not in data
    assert "X-Trace-ID" in response.headers


def test_create_member_with_explicit_fields(client):
    """Test id, role and membership date may be supplied."""
    response = _create(
        client,
        member_id=50,
        role="LIBRARIAN",
        membership_date="2020-02-02T10:00:00+00:00",
    )

    data = response.json()
    assert data["member_id"] == 50
    assert data["role"] == "LIBRARIAN"
    assert data["membership_date"].startswith("2020-02-02T10:00:00")


def test_create_member_validation_error(client):
    """Test malformed input is rejected with 422 Problem Details."""
    response = _create(client, email="nope", password="short")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["title"] == "Validation Error"
    assert "short" not in str([e.get("input") for e in body["errors"]])


def test_create_member_duplicate_username(client):
    """Test a taken username is rejected with 409."""
    _create(client, username="ada")

    response = _create(client, username="ada", email="other@example.com")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["title"] == "Duplicate Member"


def test_get_member(client):
    """Test a created member can be read back."""
    member_id = _create(client).json()["member_id"]

    response = client.get(f"/api/members/{member_id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "ada"


def test_get_member_not_found(client):
    """Test an unknown id returns 404."""
    response = client.get("/api/members/999")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Member not found"


def test_list_members_paginated(client):
    """Test listing returns one page with totals."""
    for name in ["carol", "alice", "bob", "dave", "erin", "frank"]:
        _create(client, username=name)

    response = client.get("/api/members", params={"page": 1, "size": 4, "sort_by": "username"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [m["username"] for m in data["content"]] == ["erin", "frank"]
    assert data["total_elements"] == 6
    assert data["total_pages"] == 2
    assert data["page"] == 1
    assert data["size"] == 4


def test_list_members_defaults(client):
    """Test the default page holds five members sorted by id."""
    for name in ["carol", "alice", "bob", "dave", "erin", "frank"]:
        _create(client, username=name)

    data = client.get("/api/members").json()

    assert [m["member_id"] for m in data["content"]] == [1, 2, 3, 4, 5]


def test_list_members_descending(client):
    """Test sort direction is applied."""
    for name in ["alice", "bob"]:
        _create(client, username=name)

    data = client.get(
        "/api/members", params={"sort_by": "username", "sort_dir": "desc"}
    ).json()

    assert [m["username"] for m in data["content"]] == ["bob", "alice"]


def test_list_members_invalid_sort(client):
    """Test an unknown sort property returns 400."""
    response = client.get("/api/members", params={"sort_by": "shoe_size"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "The specified 'sortBy' value is invalid."


def test_update_member(client):
    """Test profile fields are replaced and visible on the next read."""
    member_id = _create(client).json()["member_id"]
    client.get(f"/api/members/{member_id}")

    response = client.put(
        f"/api/members/{member_id}",
        json={"name": "Ada King", "username": "adaking", "email": "king@example.com"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "adaking"
    assert client.get(f"/api/members/{member_id}").json()["name"] == "Ada King"


def test_update_member_not_found(client):
    """Test updating an unknown id returns 404."""
    response = client.put(
        "/api/members/77",
        json={"name": "X", "username": "xxx", "email": "x@example.com"},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_member(client):
    """Test deletion returns 204 and the member is gone."""
    member_id = _create(client).json()["member_id"]
    client.get(f"/api/members/{member_id}")

    response = client.delete(f"/api/members/{member_id}")

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/members/{member_id}").status_code == 404


def test_delete_member_not_found(client):
    """Test deleting an unknown id returns 404."""
    assert client.delete("/api/members/12").status_code == status.HTTP_404_NOT_FOUND


def test_delete_member_with_unpaid_fine(client, factory):
    """Test a member with an unpaid fine cannot be deleted."""
    member_id = _create(client).json()["member_id"]
    asyncio.run(
        factory.get_obligations_repository().save_fine(
            Fine(fine_id="f1", member_id=member_id, amount=Decimal("1.50"))
        )
    )

    response = client.delete(f"/api/members/{member_id}")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["title"] == "Deletion Blocked"
    assert client.get(f"/api/members/{member_id}").status_code == 200


def test_delete_member_with_borrowed_book(client, factory):
    """Test a member with a book out cannot be deleted."""
    member_id = _create(client).json()["member_id"]
    asyncio.run(
        factory.get_obligations_repository().save_borrowing(
            Borrowing(
                borrowing_id="b1",
                member_id=member_id,
                book_id=3,
                borrowed_at=datetime(2024, 3, 1, tzinfo=UTC),
            )
        )
    )

    assert client.delete(f"/api/members/{member_id}").status_code == 409


def test_delete_member_purges_settled_history(client, factory):
    """Test returned books and paid fines are removed with the member."""
    member_id = _create(client).json()["member_id"]
    repo = factory.get_obligations_repository()
    asyncio.run(
        repo.save_fine(
            Fine(fine_id="f1", member_id=member_id, amount=Decimal("1"), paid=True)
        )
    )

    assert client.delete(f"/api/members/{member_id}").status_code == 204
    assert asyncio.run(repo.purge_member_records(member_id)) == 0


def test_change_password(client):
    """Test a password change succeeds and can be repeated with the new value."""
    member_id = _create(client, password="analytical-1").json()["member_id"]

    response = client.put(
        f"/api/members/{member_id}/password",
        json={"current_password": "analytical-1", "new_password": "engine-1843"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Password updated successfully"

    again = client.put(
        f"/api/members/{member_id}/password",
        json={"current_password": "engine-1843", "new_password": "engine-1844"},
    )
    assert again.status_code == status.HTTP_200_OK


def test_change_password_wrong_current(client):
    """Test a wrong current password returns 400."""
    member_id = _create(client).json()["member_id"]

    response = client.put(
        f"/api/members/{member_id}/password",
        json={"current_password": "wrong-one", "new_password": "engine-1843"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Current password is incorrect"


def test_change_password_unchanged(client):
    """Test reusing the current password returns 400."""
    member_id = _create(client, password="analytical-1").json()["member_id"]

    response = client.put(
        f"/api/members/{member_id}/password",
        json={"current_password": "analytical-1", "new_password": "analytical-1"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["title"] == "Invalid Password"


def test_change_password_unknown_member(client):
    """Test changing the password of an unknown id returns 404."""
    response = client.put(
        "/api/members/5/password",
        json={"current_password": "analytical-1", "new_password": "engine-1843"},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
