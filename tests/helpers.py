"""API helpers shared by the endpoint tests; each returns the ``data`` of a 201 response."""
from httpx import AsyncClient


async def create_user(client: AsyncClient, name: str = "Maria Silva", email: str | None = None,
                      password: str = "segredo123") -> dict:
    email = email or f"{name.lower().replace(' ', '.')}@email.com"
    resp = await client.post("/api/v1/users", json={
        "name": name,
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_tag(client: AsyncClient, name: str) -> dict:
    resp = await client.post("/api/v1/tags", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_article(client: AsyncClient, author_id: str, tag_ids: list[str],
                         title: str = "Artigo de teste", content: str = "Conteúdo do artigo de teste.") -> dict:
    resp = await client.post("/api/v1/articles", json={
        "title": title,
        "content": content,
        "author_id": author_id,
        "tag_ids": tag_ids,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
