from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.api.utils.jwt import AccessTokenSigner


@pytest.mark.asyncio
async def test_profile_without_authorization_header(client: AsyncClient):
    response = await client.get("/profile")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_profile_with_exchanged_access_token(client: AsyncClient):
    exchanged = await client.post("/auth/exchange", json={"id_token": "valid:u1"})
    access_token = exchanged.json()["access_token"]

    response = await client.get("/profile", headers={"Authorization": f"Bearer {access_token}"})

    assert response.status_code == 200
    assert response.json()["user_id"] == "u1"
    assert response.json()["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Token abc", "Basic dTE6cHc=", "Bearer", "Bearer "])
async def test_profile_with_wrong_scheme(client: AsyncClient, header):
    response = await client.get("/profile", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_profile_rejections_are_uniform(client: AsyncClient, signer):
    forged = AccessTokenSigner("another-secret", access_ttl=timedelta(minutes=15)).issue("u1")
    expired = signer.issue("u1", ttl=timedelta(seconds=-5))

    bodies = []
    for token in (forged, expired, "not-a-jwt"):
        response = await client.get("/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        bodies.append(response.json())

    assert bodies[0] == bodies[1] == bodies[2]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
