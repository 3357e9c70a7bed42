"""
User endpoint tests: registration, lookups, updates and the soft-delete /
reactivate lifecycle.  Every response is checked for the Result envelope.
"""
import uuid

import pytest
from httpx import AsyncClient

from helpers import create_user


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users", json={
        "name": "Ana Souza",
        "email": "ana@email.com",
        "password": "segredo123",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["statusCode"] == 201
    assert body["message"] == "Usuário registrado com sucesso"
    assert body["data"]["name"] == "Ana Souza"
    assert body["data"]["email"] == "ana@email.com"
    assert body["data"]["deleted_at"] is None


@pytest.mark.asyncio
async def test_password_is_never_returned(async_client: AsyncClient):
    user = await create_user(async_client)
    assert "password" not in user

    resp = await async_client.get(f"/api/v1/users/{user['id']}")
    assert "password" not in resp.json()["data"]


@pytest.mark.asyncio
async def test_create_user_duplicate_email(async_client: AsyncClient):
    await create_user(async_client, email="dup@email.com")
    resp = await async_client.post("/api/v1/users", json={
        "name": "Outra Pessoa",
        "email": "dup@email.com",
        "password": "segredo123",
    })
    assert resp.status_code == 409
    assert resp.json() == {
        "success": False,
        "data": None,
        "error": "Usuário já cadastrado com esse email",
        "statusCode": 409,
    }


@pytest.mark.asyncio
async def test_create_user_reports_every_invalid_field(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users", json={
        "name": "Al",
        "email": "not-an-email",
        "password": "123",
    })
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == [
        "Nome deve ter no mínimo 3 caracteres",
        "Email inválido",
        "Senha deve ter no mínimo 6 caracteres",
    ]


@pytest.mark.asyncio
async def test_create_user_invalid_avatar(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users", json={
        "name": "Ana Souza",
        "email": "ana@email.com",
        "password": "segredo123",
        "avatar": "not a url",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "Avatar deve ser uma URL válida"


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_user(async_client: AsyncClient):
    user = await create_user(async_client)
    resp = await async_client.get(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == user["id"]


@pytest.mark.asyncio
async def test_get_user_not_found(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/users/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Usuário não encontrado"


@pytest.mark.asyncio
async def test_get_user_invalid_id(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/users/abc")
    assert resp.status_code == 400
    assert resp.json()["error"] == "ID do usuário deve ser um UUID válido"


@pytest.mark.asyncio
async def test_list_users_paginated(async_client: AsyncClient):
    for i in range(3):
        await create_user(async_client, name=f"Pessoa {i}", email=f"p{i}@email.com")

    resp = await async_client.get("/api/v1/users?page=1&limit=2")
    assert resp.status_code == 200
    page = resp.json()["data"]
    assert page["total"] == 3
    assert page["pages"] == 2
    assert page["limit"] == 2
    assert [u["name"] for u in page["items"]] == ["Pessoa 2", "Pessoa 1"]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_user(async_client: AsyncClient):
    user = await create_user(async_client)
    resp = await async_client.put(f"/api/v1/users/{user['id']}", json={"name": "Maria Oliveira"})
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Maria Oliveira"
    assert resp.json()["data"]["email"] == user["email"]


@pytest.mark.asyncio
async def test_update_user_email_taken(async_client: AsyncClient):
    await create_user(async_client, name="Primeira", email="primeira@email.com")
    second = await create_user(async_client, name="Segunda", email="segunda@email.com")
    resp = await async_client.put(
        f"/api/v1/users/{second['id']}", json={"email": "primeira@email.com"}
    )
    assert resp.status_code == 409


# ---------------------------------------------------------------------------
# Soft delete / reactivate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_user_lifecycle(async_client: AsyncClient):
    user = await create_user(async_client)

    resp = await async_client.delete(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Usuário desativado com sucesso"
    assert resp.json()["data"]["deleted_at"] is not None

    resp = await async_client.get(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 404

    resp = await async_client.get("/api/v1/users")
    assert resp.json()["data"]["total"] == 0

    resp = await async_client.delete(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Usuário já está desativado"


@pytest.mark.asyncio
async def test_reactivate_user(async_client: AsyncClient):
    user = await create_user(async_client)

    resp = await async_client.post(f"/api/v1/users/{user['id']}/reactivate")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Usuário já está ativo"

    await async_client.delete(f"/api/v1/users/{user['id']}")
    resp = await async_client.post(f"/api/v1/users/{user['id']}/reactivate")
    assert resp.status_code == 200
    assert resp.json()["data"]["deleted_at"] is None

    resp = await async_client.get(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_deleted_user_keeps_email_reserved(async_client: AsyncClient):
    user = await create_user(async_client, email="reservado@email.com")
    await async_client.delete(f"/api/v1/users/{user['id']}")

    resp = await async_client.post("/api/v1/users", json={
        "name": "Nova Pessoa",
        "email": "reservado@email.com",
        "password": "segredo123",
    })
    assert resp.status_code == 409
