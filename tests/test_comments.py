"""
Comment endpoint tests: creation rules for threaded replies, listings and
the article thread view.
"""
import uuid

import pytest
from httpx import AsyncClient

from helpers import create_article, create_tag, create_user


async def _user_and_article(client: AsyncClient, title: str = "Artigo comentado") -> tuple[dict, dict]:
    user = await create_user(client)
    tag = await create_tag(client, f"t{uuid.uuid4().hex[:6]}")
    article = await create_article(client, user["id"], [tag["id"]], title=title)
    return user, article


async def _comment(client: AsyncClient, user: dict, article: dict, content: str, parent: dict | None = None) -> dict:
    payload = {"content": content, "article_id": article["id"], "user_id": user["id"]}
    if parent is not None:
        payload["parent_id"] = parent["id"]
    resp = await client.post("/api/v1/comments", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    resp = await async_client.post("/api/v1/comments", json={
        "content": "Ótimo artigo!",
        "article_id": article["id"],
        "user_id": user["id"],
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Comentário registrado com sucesso"
    assert body["data"]["content"] == "Ótimo artigo!"
    assert body["data"]["parent_id"] is None
    assert body["data"]["user"]["name"] == user["name"]


@pytest.mark.asyncio
async def test_create_comment_unknown_user(async_client: AsyncClient):
    _, article = await _user_and_article(async_client)
    resp = await async_client.post("/api/v1/comments", json={
        "content": "Olá",
        "article_id": article["id"],
        "user_id": str(uuid.uuid4()),
    })
    assert resp.status_code == 404
    assert resp.json()["error"] == "Usuário não encontrado"


@pytest.mark.asyncio
async def test_create_comment_unknown_article(async_client: AsyncClient):
    user = await create_user(async_client)
    resp = await async_client.post("/api/v1/comments", json={
        "content": "Olá",
        "article_id": str(uuid.uuid4()),
        "user_id": user["id"],
    })
    assert resp.status_code == 404
    assert resp.json()["error"] == "Artigo não encontrado"


@pytest.mark.asyncio
async def test_create_comment_validation(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/comments", json={
        "content": "x",
        "article_id": "nope",
        "user_id": "nope",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == [
        "Comentário deve ter no mínimo 2 caracteres",
        "ID do artigo deve ser um UUID válido",
        "ID do usuário deve ser um UUID válido",
    ]


@pytest.mark.asyncio
async def test_reply_to_missing_parent(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    resp = await async_client.post("/api/v1/comments", json={
        "content": "Resposta",
        "article_id": article["id"],
        "user_id": user["id"],
        "parent_id": str(uuid.uuid4()),
    })
    assert resp.status_code == 404
    assert resp.json()["error"] == "Comentário pai não encontrado"


@pytest.mark.asyncio
async def test_reply_must_stay_on_the_same_article(async_client: AsyncClient):
    user, first = await _user_and_article(async_client, title="Primeiro artigo")
    tag = await create_tag(async_client, "outra")
    second = await create_article(async_client, user["id"], [tag["id"]], title="Segundo artigo")
    parent = await _comment(async_client, user, first, "Comentário raiz")

    resp = await async_client.post("/api/v1/comments", json={
        "content": "Resposta",
        "article_id": second["id"],
        "user_id": user["id"],
        "parent_id": parent["id"],
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "Comentário pai pertence a outro artigo"


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_root_comments_only(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    root = await _comment(async_client, user, article, "Raiz antiga")
    await _comment(async_client, user, article, "Resposta", parent=root)
    await _comment(async_client, user, article, "Raiz nova")

    resp = await async_client.get("/api/v1/comments")
    page = resp.json()["data"]
    assert page["total"] == 2
    assert [c["content"] for c in page["items"]] == ["Raiz nova", "Raiz antiga"]


@pytest.mark.asyncio
async def test_list_replies_oldest_first(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    root = await _comment(async_client, user, article, "Raiz")
    await _comment(async_client, user, article, "Primeira resposta", parent=root)
    await _comment(async_client, user, article, "Segunda resposta", parent=root)

    resp = await async_client.get(f"/api/v1/comments/{root['id']}/replies")
    assert resp.status_code == 200
    assert [c["content"] for c in resp.json()["data"]["items"]] == [
        "Primeira resposta",
        "Segunda resposta",
    ]


@pytest.mark.asyncio
async def test_replies_of_missing_comment(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/comments/{uuid.uuid4()}/replies")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_article_comment_threads(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    old_root = await _comment(async_client, user, article, "Raiz antiga")
    kept = await _comment(async_client, user, article, "Resposta mantida", parent=old_root)
    removed = await _comment(async_client, user, article, "Resposta removida", parent=old_root)
    await _comment(async_client, user, article, "Raiz nova")
    await async_client.delete(f"/api/v1/comments/{removed['id']}")

    resp = await async_client.get(f"/api/v1/articles/{article['id']}/comments")
    assert resp.status_code == 200
    threads = resp.json()["data"]
    assert [t["content"] for t in threads] == ["Raiz nova", "Raiz antiga"]
    assert threads[0]["replies"] == []
    assert [r["id"] for r in threads[1]["replies"]] == [kept["id"]]
    assert threads[1]["user"]["id"] == user["id"]
    assert threads[1]["replies"][0]["user"]["id"] == user["id"]


@pytest.mark.asyncio
async def test_comments_of_missing_article(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/articles/{uuid.uuid4()}/comments")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Artigo não encontrado"


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_comment(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    comment = await _comment(async_client, user, article, "Texto original")

    resp = await async_client.put(f"/api/v1/comments/{comment['id']}", json={"content": "Texto editado"})
    assert resp.status_code == 200
    assert resp.json()["data"]["content"] == "Texto editado"
    assert resp.json()["message"] == "Comentário atualizado com sucesso"


@pytest.mark.asyncio
async def test_delete_comment_twice(async_client: AsyncClient):
    user, article = await _user_and_article(async_client)
    comment = await _comment(async_client, user, article, "Vou sumir")

    resp = await async_client.delete(f"/api/v1/comments/{comment['id']}")
    assert resp.status_code == 200

    resp = await async_client.get(f"/api/v1/comments/{comment['id']}")
    assert resp.status_code == 404

    resp = await async_client.delete(f"/api/v1/comments/{comment['id']}")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Comentário já está desativado"
