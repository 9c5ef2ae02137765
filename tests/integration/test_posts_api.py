from httpx import AsyncClient
import pytest

NEW_POST = {"title": "First post", "content": "# Hello\nWorld", "category": "tech", "keywords": "intro,hello"}


async def _create(client: AsyncClient, **overrides) -> dict:
    resp = await client.post("/api/posts", json={**NEW_POST, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.integration
@pytest.mark.anyio
async def test_create_and_read_post(admin_client: AsyncClient):
    created = await _create(admin_client)

    assert created["title"] == "First post"
    assert created["published"] is True
    assert created["views"] == 0
    assert "createdAt" in created and "updatedAt" in created

    resp = await admin_client.get(f"/api/posts/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["post"] == created


@pytest.mark.integration
@pytest.mark.anyio
async def test_admin_endpoints_require_session(client: AsyncClient):
    assert (await client.post("/api/posts", json=NEW_POST)).status_code == 401
    assert (await client.put("/api/posts/x", json={"title": "t"})).status_code == 401
    assert (await client.delete("/api/posts/x")).status_code == 401
    assert (await client.get("/api/posts", params={"admin": "true"})).status_code == 401
    assert (await client.put("/api/settings", json={"blogTitle": "x"})).status_code == 401
    assert (await client.get("/api/admin/stats")).status_code == 401

    resp = await client.post("/api/posts", json=NEW_POST, headers={"Authorization": "Bearer forged"})
    assert resp.status_code == 401
    assert resp.json()["error"]["type"] == "AuthenticationError"


@pytest.mark.integration
@pytest.mark.anyio
async def test_create_post_validation(admin_client: AsyncClient):
    resp = await admin_client.post("/api/posts", json={"title": "  ", "content": "x"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Title is required"

    resp = await admin_client.post("/api/posts", json={"title": "t" * 201, "content": "x"})
    assert resp.status_code == 400

    resp = await admin_client.post("/api/posts", json={"title": "ok", "content": ""})
    assert resp.status_code == 400

    resp = await admin_client.post("/api/posts", json={"title": "ok", "content": "x", "category": "c" * 51})
    assert resp.status_code == 400


@pytest.mark.integration
@pytest.mark.anyio
async def test_partial_update_and_delete(admin_client: AsyncClient):
    created = await _create(admin_client)

    resp = await admin_client.put(f"/api/posts/{created['id']}", json={"published": False})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["published"] is False
    assert updated["title"] == created["title"]
    assert updated["createdAt"] == created["createdAt"]

    assert (await admin_client.get(f"/api/posts/{created['id']}")).status_code == 404
    resp = await admin_client.get(f"/api/posts/{created['id']}", params={"admin": "true"})
    assert resp.status_code == 200

    assert (await admin_client.put("/api/posts/missing", json={"title": "x"})).status_code == 404
    assert (await admin_client.put(f"/api/posts/{created['id']}", json={"title": ""})).status_code == 400

    resp = await admin_client.delete(f"/api/posts/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert (await admin_client.delete(f"/api/posts/{created['id']}")).status_code == 404


@pytest.mark.integration
@pytest.mark.anyio
async def test_listing_pagination_and_filters(admin_client: AsyncClient):
    for i in range(12):
        await _create(admin_client, title=f"Post {i}", category="even" if i % 2 == 0 else "odd")
    await _create(admin_client, title="Draft", published=False)

    resp = await admin_client.get("/api/posts", params={"page": "2", "pageSize": "5"})
    body = resp.json()
    assert body["total"] == 12
    assert body["page"] == 2
    assert body["pageSize"] == 5
    assert len(body["posts"]) == 5

    resp = await admin_client.get("/api/posts", params={"page": "abc", "pageSize": "1000"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["page"] == 1
    assert body["pageSize"] == 50

    resp = await admin_client.get("/api/posts", params={"category": "odd"})
    assert resp.json()["total"] == 6

    resp = await admin_client.get("/api/posts", params={"admin": "true"})
    body = resp.json()
    assert body["total"] == 13
    assert any(p["title"] == "Draft" for p in body["posts"])


@pytest.mark.integration
@pytest.mark.anyio
async def test_views_categories_search_and_adjacent(admin_client: AsyncClient):
    first = await _create(admin_client, title="Alpha", category="tech")
    second = await _create(admin_client, title="Beta", category="life", keywords="alpha-ish")

    resp = await admin_client.post(f"/api/posts/{first['id']}/views")
    assert resp.status_code == 200
    assert (await admin_client.get(f"/api/posts/{first['id']}")).json()["post"]["views"] == 1
    assert (await admin_client.post("/api/posts/missing/views")).status_code == 404

    resp = await admin_client.get("/api/categories")
    assert resp.json() == {"categories": ["life", "tech"]}

    resp = await admin_client.get("/api/search", params={"q": "alpha"})
    assert {p["title"] for p in resp.json()["posts"]} == {"Alpha", "Beta"}
    assert (await admin_client.get("/api/search", params={"q": "  "})).json() == {"posts": []}
    assert (await admin_client.get("/api/search", params={"q": "x" * 101})).status_code == 400

    resp = await admin_client.get(f"/api/posts/{first['id']}/adjacent")
    neighbours = [p for p in resp.json().values() if p]
    assert neighbours == [
        {"id": second["id"], "title": "Beta", "category": "life", "createdAt": second["createdAt"]}
    ]

    resp = await admin_client.get(f"/api/posts/{first['id']}/adjacent", params={"category": "tech"})
    assert resp.json() == {"prev": None, "next": None}


@pytest.mark.integration
@pytest.mark.anyio
async def test_post_content_is_sanitized(admin_client: AsyncClient):
    created = await _create(admin_client, content="a\x00b\x01c\n  ")
    assert created["content"] == "abc"

    resp = await admin_client.put(f"/api/posts/{created['id']}", json={"content": "\tx\x07y\nz\x7f "})
    assert resp.status_code == 200
    assert resp.json()["content"] == "xy\nz"

    resp = await admin_client.put(f"/api/posts/{created['id']}", json={"content": "\x01\x02"})
    assert resp.status_code == 400
    assert (await admin_client.post("/api/posts", json={**NEW_POST, "content": "\x00"})).status_code == 400


@pytest.mark.integration
@pytest.mark.anyio
async def test_null_optional_fields_leave_post_unchanged(admin_client: AsyncClient):
    created = await _create(admin_client)

    resp = await admin_client.put(
        f"/api/posts/{created['id']}", json={"title": "Renamed", "category": None, "keywords": None}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Renamed"
    assert body["category"] == "tech"
    assert body["keywords"] == "intro,hello"


@pytest.mark.integration
@pytest.mark.anyio
async def test_out_of_range_page_yields_empty_page(admin_client: AsyncClient):
    await _create(admin_client)
    huge = "99999999999999999999"

    resp = await admin_client.get("/api/posts", params={"page": huge, "pageSize": "10"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["posts"] == []
    assert body["total"] == 1
    assert body["page"] == (2**63 - 1) // 10

    resp = await admin_client.get("/api/posts", params={"admin": "true", "page": huge})
    assert resp.status_code == 200
    assert resp.json()["posts"] == []

    for path in ("/api/admin/comments", "/api/admin/likes"):
        resp = await admin_client.get(path, params={"page": huge, "pageSize": "20"})
        assert resp.status_code == 200, path
