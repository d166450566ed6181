"""Integration tests for authentication endpoints."""

from __future__ import annotations

import pytest
from fastapi import status
from httpx import AsyncClient
from src.core.auth import decode_access_token
from tests.utils import SEED_ADMIN, headers_for


@pytest.fixture
def test_user() -> dict:
    """Test user data."""
    return {
        "name": "Test User",
        "email": "testuser@example.com",
        "studentId": "2024-0042",
    }


class TestRegisterEndpoint:
    """Tests for POST /auth/register endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, async_client: AsyncClient, test_user: dict) -> None:
        """Successful registration should return 201 with a session token."""
        response = await async_client.post("/auth/register", json=test_user)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()

        assert data["tokenType"] == "bearer"
        assert data["session"]["email"] == test_user["email"]
        assert data["session"]["role"] == "student"
        assert data["session"]["status"] == "active"
        claims = decode_access_token(data["accessToken"])
        assert claims["sub"] == data["session"]["userId"]
        assert claims["role"] == "student"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(
        self, async_client: AsyncClient, test_user: dict
    ) -> None:
        """Registering with existing email should return 409."""
        await async_client.post("/auth/register", json=test_user)

        response = await async_client.post("/auth/register", json=test_user)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already exists" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, async_client: AsyncClient) -> None:
        """Invalid email format should return 422."""
        response = await async_client.post(
            "/auth/register", json={"name": "X", "email": "not-an-email"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_register_admin_rejected(self, async_client: AsyncClient) -> None:
        """Admins are created by other admins, not through self-registration."""
        response = await async_client.post(
            "/auth/register",
            json={"name": "Root", "email": "root@example.com", "role": "admin"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestLoginEndpoint:
    """Tests for POST /auth/login endpoint."""

    @pytest.mark.asyncio
    async def test_login_seeded_user(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/auth/login", json={"email": "Jane.Smith@msu.edu.ph"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["session"]["userId"] == "3"
        assert data["session"]["role"] == "coordinator"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/auth/login", json={"email": "ghost@example.com"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_login_suspended_user(self, async_client: AsyncClient) -> None:
        await async_client.post("/users/5/suspend", headers=headers_for(SEED_ADMIN))

        response = await async_client.post(
            "/auth/login", json={"email": "alice.johnson@student.msu.edu.ph"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestMeEndpoint:
    """Tests for GET /auth/me endpoint."""

    @pytest.mark.asyncio
    async def test_me_returns_stored_profile(self, async_client: AsyncClient) -> None:
        login = await async_client.post(
            "/auth/login", json={"email": "john.doe@student.msu.edu.ph"}
        )
        token = login.json()["accessToken"]

        response = await async_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "John Doe"

    @pytest.mark.asyncio
    async def test_me_without_token(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_me_with_garbage_token(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/auth/me", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
