"""Tests for category endpoints."""
from pathlib import Path

from httpx import AsyncClient


async def _names(client: AsyncClient) -> list[str]:
    response = await client.get("/api/categories")
    assert response.status_code == 200
    return [c["name"] for c in response.json()]


async def test_list_categories_starts_with_uncategorized(client: AsyncClient) -> None:
    response = await client.get("/api/categories")
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 1
    assert data[0]["name"] == "Uncategorized"
    assert set(data[0]) == {"name", "color", "order"}


async def test_create_category(client: AsyncClient) -> None:
    response = await client.post("/api/categories", json={"name": "Work", "color": "#ff0000"})
    assert response.status_code == 200
    assert response.json() == {"name": "Work", "color": "#ff0000", "order": 0}

    response = await client.post("/api/categories", json={"name": "Home", "color": "#00ff00"})
    assert response.json()["order"] == 1
    assert await _names(client) == ["Work", "Home", "Uncategorized"]


async def test_create_category_missing_fields(client: AsyncClient) -> None:
    for body in ({"name": "Work"}, {"color": "#fff"}, {}):
        response = await client.post("/api/categories", json=body)
        assert response.status_code == 400


async def test_create_category_duplicate(client: AsyncClient) -> None:
    await client.post("/api/categories", json={"name": "Work", "color": "#ff0000"})

    response = await client.post("/api/categories", json={"name": "Work", "color": "#000"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Category 'Work' already exists"


async def test_delete_category_moves_bookmarks(client: AsyncClient) -> None:
    await client.post("/api/categories", json={"name": "Work", "color": "#ff0000"})
    await client.post("/api/categories", json={"name": "Reading", "color": "#0000ff"})
    bookmark = (await client.post(
        "/api/bookmarks", json={"title": "Jira", "url": "https://jira", "category": "Work"},
    )).json()

    response = await client.delete("/api/categories/Work")
    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted"}

    assert await _names(client) == ["Reading", "Uncategorized"]
    bookmarks = (await client.get("/api/bookmarks")).json()
    assert bookmarks == [{**bookmark, "category": "Uncategorized"}]


async def test_delete_uncategorized_forbidden(client: AsyncClient) -> None:
    response = await client.delete("/api/categories/Uncategorized")
    assert response.status_code == 400
    assert await _names(client) == ["Uncategorized"]


async def test_delete_unknown_category(client: AsyncClient) -> None:
    response = await client.delete("/api/categories/Ghost")
    assert response.status_code == 200


async def test_reorder_categories(client: AsyncClient) -> None:
    for name in ("A", "B", "C"):
        await client.post("/api/categories", json={"name": name, "color": "#000"})

    response = await client.put(
        "/api/categories/reorder", json={"orderedCategories": ["C", "A", "B"]},
    )
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["C", "A", "B", "Uncategorized"]
    assert await _names(client) == ["C", "A", "B", "Uncategorized"]


async def test_reorder_categories_ignores_unknown(client: AsyncClient) -> None:
    await client.post("/api/categories", json={"name": "A", "color": "#000"})

    response = await client.put(
        "/api/categories/reorder",
        json={"orderedCategories": ["Uncategorized", "Ghost", "A"]},
    )
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["A", "Uncategorized"]


async def test_storage_failure_returns_500(client: AsyncClient, tmp_path: Path) -> None:
    """A corrupt document surfaces as a generic 500."""
    (tmp_path / "categories.json").write_text("{broken", encoding="utf-8")

    response = await client.get("/api/categories")
    assert response.status_code == 500
    assert response.json() == {"detail": "Storage is unavailable. Please try again later."}

    response = await client.post("/api/categories", json={"name": "Work", "color": "#000"})
    assert response.status_code == 500


async def test_delete_category_with_slash_in_name(client: AsyncClient) -> None:
    """Names containing '/' are valid and must be deletable by URL."""
    await client.post("/api/categories", json={"name": "News/Politics", "color": "#f00"})
    bookmark = (await client.post(
        "/api/bookmarks",
        json={"title": "Paper", "url": "https://paper", "category": "News/Politics"},
    )).json()

    response = await client.delete("/api/categories/News%2FPolitics")
    assert response.status_code == 200
    assert await _names(client) == ["Uncategorized"]
    bookmarks = (await client.get("/api/bookmarks")).json()
    assert bookmarks == [{**bookmark, "category": "Uncategorized"}]


async def test_delete_category_with_unescaped_slash(client: AsyncClient) -> None:
    await client.post("/api/categories", json={"name": "a/b", "color": "#f00"})

    response = await client.delete("/api/categories/a/b")
    assert response.status_code == 200
    assert await _names(client) == ["Uncategorized"]
