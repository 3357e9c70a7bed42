import uuid

import pytest
from httpx import AsyncClient

from helpers import create_article, create_tag, create_user


@pytest.mark.asyncio
async def test_create_tag(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/tags", json={"name": "python"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Tag registrada com sucesso"
    assert body["data"]["name"] == "python"


@pytest.mark.asyncio
async def test_create_tag_duplicate_name(async_client: AsyncClient):
    await create_tag(async_client, "python")
    resp = await async_client.post("/api/v1/tags", json={"name": "python"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "Tag já cadastrada com esse nome"


@pytest.mark.asyncio
@pytest.mark.parametrize("name,message", [
    ("a", "A tag deve ter no mínimo 2 caracteres"),
    ("abcdefghijklm", "A tag deve ter no máximo 12 caracteres"),
])
async def test_create_tag_name_length(async_client: AsyncClient, name, message):
    resp = await async_client.post("/api/v1/tags", json={"name": name})
    assert resp.status_code == 400
    assert resp.json()["error"] == message


@pytest.mark.asyncio
async def test_get_and_list_tags(async_client: AsyncClient):
    tag = await create_tag(async_client, "python")
    await create_tag(async_client, "fastapi")

    resp = await async_client.get(f"/api/v1/tags/{tag['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "python"

    resp = await async_client.get("/api/v1/tags")
    page = resp.json()["data"]
    assert page["total"] == 2
    assert [t["name"] for t in page["items"]] == ["fastapi", "python"]


@pytest.mark.asyncio
async def test_get_tag_not_found(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/tags/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Tag não encontrada"


@pytest.mark.asyncio
async def test_update_tag(async_client: AsyncClient):
    tag = await create_tag(async_client, "pyton")
    resp = await async_client.put(f"/api/v1/tags/{tag['id']}", json={"name": "python"})
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "python"


@pytest.mark.asyncio
async def test_update_tag_to_taken_name(async_client: AsyncClient):
    await create_tag(async_client, "python")
    other = await create_tag(async_client, "rust")
    resp = await async_client.put(f"/api/v1/tags/{other['id']}", json={"name": "python"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_delete_tag_twice(async_client: AsyncClient):
    tag = await create_tag(async_client, "python")

    resp = await async_client.delete(f"/api/v1/tags/{tag['id']}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Tag desativada com sucesso"

    resp = await async_client.delete(f"/api/v1/tags/{tag['id']}")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Tag já está desativada"

    resp = await async_client.get("/api/v1/tags")
    assert resp.json()["data"]["items"] == []


@pytest.mark.asyncio
async def test_articles_of_tag(async_client: AsyncClient):
    author = await create_user(async_client)
    python = await create_tag(async_client, "python")
    rust = await create_tag(async_client, "rust")
    await create_article(async_client, author["id"], [python["id"]], title="Sobre Python")
    await create_article(async_client, author["id"], [rust["id"]], title="Sobre Rust")

    resp = await async_client.get(f"/api/v1/tags/{python['id']}/articles")
    assert resp.status_code == 200
    articles = resp.json()["data"]
    assert [a["title"] for a in articles] == ["Sobre Python"]
    assert articles[0]["tags"][0]["name"] == "python"


@pytest.mark.asyncio
async def test_articles_of_unknown_tag(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/tags/{uuid.uuid4()}/articles")
    assert resp.status_code == 404
