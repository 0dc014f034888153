from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_get_editor_view(client: AsyncClient):
    """Test that GET /editor returns the identity cube after a fresh start."""
    response = await client.get("/api/v1/editor")

    assert response.status_code == 200
    view = response.json()
    assert view["permutation"] == list(range(20))
    assert view["orientation"] == [0] * 20
    assert view["selection"] is None
    assert view["has_snapshot"] is False
    assert view["consistent"] is True


@pytest.mark.asyncio
async def test_get_catalog(client: AsyncClient):
    response = await client.get("/api/v1/editor/catalog")

    assert response.status_code == 200
    data = response.json()
    assert data["positions"][0] == "UF"
    assert data["positions"][12] == "UFR"
    assert len(data["cubies"]) == 27
    core = next(c for c in data["cubies"] if c["name"] == "")
    assert core["kind"] == "core"
    assert core["index"] is None
    assert core["coordinates"] == [0, 0, 0]


@pytest.mark.asyncio
async def test_select_erase_assign(client: AsyncClient):
    response = await client.post("/api/v1/editor/select", json={"position": "DR"})
    assert response.status_code == 200
    assert response.json()["selection"] == {"position": "DR", "locked": False}

    response = await client.post("/api/v1/editor/erase")
    assert response.status_code == 200
    assert response.json()["permutation"][5] is None

    response = await client.get("/api/v1/editor/candidates")
    available = [c["name"] for c in response.json() if c["available"]]
    assert available == ["DR"]

    response = await client.post("/api/v1/editor/assign", json={"piece": "DR"})
    assert response.status_code == 200
    assert response.json()["permutation"][5] == 5


@pytest.mark.asyncio
async def test_assign_active_piece_conflicts(client: AsyncClient):
    await client.post("/api/v1/editor/select", json={"position": "UF"})

    response = await client.post("/api/v1/editor/assign", json={"piece": "DR"})

    assert response.status_code == 409
    view = (await client.get("/api/v1/editor")).json()
    assert view["permutation"] == list(range(20))


@pytest.mark.asyncio
async def test_assign_wrong_category(client: AsyncClient):
    await client.post("/api/v1/editor/select", json={"position": "UFR"})

    response = await client.post("/api/v1/editor/assign", json={"piece": "UF"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_select_unknown_position(client: AsyncClient):
    response = await client.post("/api/v1/editor/select", json={"position": "XYZ"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rotate_corner(client: AsyncClient):
    await client.post("/api/v1/editor/select", json={"position": "UFR"})

    response = await client.post("/api/v1/editor/rotate", json={"position": "UFR"})

    assert response.status_code == 200
    view = response.json()
    assert view["orientation"][12] == 2
    assert view["stickers"]["UFR"] == "RUF"
    assert view["solved"] is False


@pytest.mark.asyncio
async def test_rotate_without_selection(client: AsyncClient):
    response = await client.post("/api/v1/editor/rotate")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_save_locks_and_load_restores(client: AsyncClient):
    await client.post("/api/v1/editor/select", json={"position": "UF"})
    await client.post("/api/v1/editor/erase")

    response = await client.post("/api/v1/editor/save")
    assert response.status_code == 200
    assert response.json()["has_snapshot"] is True

    response = await client.post("/api/v1/editor/select", json={"position": "UR"})
    assert response.json()["selection"]["locked"] is True
    response = await client.post("/api/v1/editor/erase")
    assert response.status_code == 409

    response = await client.post("/api/v1/editor/load")
    assert response.status_code == 200
    assert response.json()["permutation"][0] is None


@pytest.mark.asyncio
async def test_selection_after_winning(client: AsyncClient):
    await client.post("/api/v1/editor/save")

    response = await client.post("/api/v1/editor/select", json={"position": "UF"})

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_load_without_save(client: AsyncClient):
    response = await client.post("/api/v1/editor/load")

    assert response.status_code == 404
