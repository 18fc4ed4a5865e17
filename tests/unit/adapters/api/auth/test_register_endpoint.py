import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_register_user_success(async_client):
    response = await async_client.post(
        "/authentication/register",
        json={"email": "Ada@Example.com", "password": "password1", "name": "Ada Lovelace"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["id"] > 0
    assert body["email"] == "ada@example.com"
    assert body["name"] == "Ada Lovelace"
    assert body["createdAt"]
    assert body["updatedAt"] is None
    assert "password" not in body
    assert "hashedPassword" not in body


@pytest.mark.asyncio
async def test_register_without_name(async_client):
    response = await async_client.post(
        "/authentication/register", json={"email": "ada@example.com", "password": "password1"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["name"] is None


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client, registered_user):
    response = await async_client.post(
        "/authentication/register",
        json={"email": "ADA@example.com", "password": "another-password"},
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"detail": "User with this email already exists"}


@pytest.mark.asyncio
async def test_register_validation_messages(async_client):
    response = await async_client.post(
        "/authentication/register", json={"email": "not-an-email", "password": "short"}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == [
        "Email must be a valid email address.",
        "Password must be at least 8 characters long.",
    ]


@pytest.mark.asyncio
async def test_register_missing_fields(async_client):
    response = await async_client.post("/authentication/register", json={})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == ["Email is required.", "Password is required."]


@pytest.mark.asyncio
async def test_register_password_longer_than_bcrypt_input(async_client):
    response = await async_client.post(
        "/authentication/register",
        json={"email": "ada@example.com", "password": "a" * 72 + "suffix"},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == ["Password must not exceed 72 bytes."]


@pytest.mark.asyncio
async def test_register_name_too_long(async_client):
    response = await async_client.post(
        "/authentication/register",
        json={"email": "ada@example.com", "password": "password1", "name": "x" * 101},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == ["Name must not exceed 100 characters."]


@pytest.mark.asyncio
async def test_register_conflict_is_translated(async_client, registered_user):
    response = await async_client.post(
        "/authentication/register",
        json={"email": "ada@example.com", "password": "password1"},
        headers={"Accept-Language": "es"},
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.headers["Content-Language"] == "es"
    assert response.json()["detail"] != "User with this email already exists"
