import jwt
import pytest
from fastapi import status

from signet.core.config.settings import settings


@pytest.mark.asyncio
async def test_login_success(async_client, registered_user):
    response = await async_client.post(
        "/authentication/login",
        json={"email": "ada@example.com", "password": "password1"},
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["expiresIn"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["name"] == "Ada Lovelace"

    payload = jwt.decode(
        body["accessToken"],
        settings.JWT_SECRET.get_secret_value(),
        algorithms=["HS256"],
        audience=settings.JWT_AUDIENCE,
    )
    assert payload["sub"] == str(body["user"]["id"])
    assert payload["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_login_sets_http_only_refresh_cookie(async_client, registered_user):
    response = await async_client.post(
        "/authentication/login",
        json={"email": "ada@example.com", "password": "password1"},
    )

    assert response.cookies.get("refreshToken")
    assert "httponly" in response.headers["set-cookie"].lower()
    assert "refreshToken" not in response.json()


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(async_client, registered_user):
    response = await async_client.post(
        "/authentication/login",
        json={"email": " ADA@Example.com", "password": "password1"},
    )

    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_wrong_password_always_fails(async_client, registered_user):
    for _ in range(3):
        response = await async_client.post(
            "/authentication/login",
            json={"email": "ada@example.com", "password": "wrong-password"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"detail": "Invalid credentials"}
        assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_unknown_email_gets_the_same_answer(async_client):
    response = await async_client.post(
        "/authentication/login",
        json={"email": "nobody@example.com", "password": "password1"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"detail": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_missing_password(async_client):
    response = await async_client.post(
        "/authentication/login", json={"email": "ada@example.com", "password": "  "}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == ["Password is required."]
