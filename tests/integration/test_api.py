"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from orrery import __version__
from orrery.api.app import create_app
from orrery.api.runtime import ApiState
from orrery.config import Settings


def _make_app(**overrides):
    def factory() -> ApiState:
        return ApiState(settings=Settings(**overrides))

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


@pytest.mark.asyncio
async def test_health_and_board():
    app, transport = _make_app(initial_rotation_level=2)
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            health = await client.get("/health")
            assert health.status_code == 200
            assert health.json()["status"] == "ok"
            assert health.json()["next_level"] == 2

            board = await client.get("/board")
            assert board.status_code == 200
            assert board.json() == {
                "rotation": {"level1": 0, "level2": 0, "level3": 0},
                "next_level": 2,
                "probes": [],
            }


@pytest.mark.asyncio
async def test_objects_and_cells():
    app, transport = _make_app(initial_level1_angle=-90)
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            objects = await client.get("/objects")
            assert objects.status_code == 200
            by_id = {obj["id"]: obj for obj in objects.json()}
            assert by_id["mercury"]["absolute_sector"] == 4
            assert by_id["mercury"]["native_sector"] == 2
            assert by_id["empty-level1-3"]["is_present"] is False

            cell = await client.get("/cells/level1/4")
            assert cell.status_code == 200
            assert cell.json()["objects"] == ["mercury"]
            assert cell.json()["native_sector"] == 2

            adjacent = await client.get("/cells/fixed/1/adjacent")
            assert adjacent.json() == [
                {"ring": "fixed", "sector": 2},
                {"ring": "fixed", "sector": 8},
                {"ring": "level1", "sector": 1},
            ]

            missing = await client.get("/cells/level7/1")
            assert missing.status_code == 422
            out_of_range = await client.get("/cells/fixed/9/adjacent")
            assert out_of_range.status_code == 422


@pytest.mark.asyncio
async def test_reachability_endpoint():
    app, transport = _make_app()
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post(
                "/reachability",
                json={"origin": {"ring": "fixed", "sector": 3}, "budget": 2},
            )
            assert response.status_code == 200
            cells = response.json()["cells"]
            assert cells[0] == {"ring": "fixed", "sector": 3, "cost": 0}
            assert {(c["ring"], c["sector"], c["cost"]) for c in cells[1:]} == {
                ("fixed", 2, 2),
                ("fixed", 4, 2),
                ("level1", 3, 2),
            }

            waived = await client.post(
                "/reachability",
                json={
                    "origin": {"ring": "fixed", "sector": 3},
                    "budget": 2,
                    "modifiers": {"waived": ["asteroid_exit"]},
                },
            )
            assert len(waived.json()["cells"]) == 9

            with_energy = await client.post(
                "/reachability",
                json={"origin": {"ring": "fixed", "sector": 3}, "budget": 1, "energy": 1},
            )
            assert with_energy.json()["budget"] == 2
            assert with_energy.json()["cells"] == cells

            invalid = await client.post(
                "/reachability",
                json={"origin": {"ring": "fixed", "sector": 1}, "budget": -1},
            )
            assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_rotation_moves_probes():
    app, transport = _make_app()
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            created = await client.post(
                "/probes",
                json={
                    "probe_id": "p1",
                    "owner_id": "alice",
                    "at": {"ring": "level1", "sector": 3},
                },
            )
            assert created.status_code == 201
            assert created.json() == {"ring": "level1", "sector": 3}

            rotation = await client.post("/rotations", json={})
            assert rotation.status_code == 200
            payload = rotation.json()
            assert payload["level"] == 1
            assert payload["new_rotation"] == {"level1": 315, "level2": 0, "level3": 0}
            assert payload["next_level"] == 2
            assert payload["events"][0]["after"] == {"ring": "level1", "sector": 4}

            explicit = await client.post("/rotations", json={"level": 3})
            assert explicit.json()["next_level"] == 1

            invalid = await client.post("/rotations", json={"level": 4})
            assert invalid.status_code == 422

            board = await client.get("/board")
            probe = board.json()["probes"][0]
            assert probe["native_sector"] == 3
            assert probe["sector"] == 5


@pytest.mark.asyncio
async def test_probe_launch_and_move():
    app, transport = _make_app()
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            launched = await client.post("/probes", json={"probe_id": "p1", "owner_id": "alice"})
            assert launched.json() == {"ring": "fixed", "sector": 1}

            duplicate = await client.post("/probes", json={"probe_id": "p1", "owner_id": "bob"})
            assert duplicate.status_code == 409

            too_far = await client.post(
                "/probes/p1/move",
                json={"destination": {"ring": "fixed", "sector": 5}, "budget": 3},
            )
            assert too_far.status_code == 422
            assert too_far.json()["detail"]["minimal_cost"] == 4

            moved = await client.post(
                "/probes/p1/move",
                json={"destination": {"ring": "fixed", "sector": 5}, "budget": 4},
            )
            assert moved.status_code == 200
            assert moved.json() == {
                "probe_id": "p1",
                "position": {"ring": "fixed", "sector": 5},
                "cost": 4,
            }

            unknown = await client.post(
                "/probes/ghost/move",
                json={"destination": {"ring": "fixed", "sector": 2}, "budget": 1},
            )
            assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_openapi_describes_board_api():
    app, transport = _make_app()
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            schema = (await client.get("/openapi.json")).json()

    assert schema["info"]["title"] == "Orrery board API"
    assert schema["info"]["version"] == __version__
    assert [tag["name"] for tag in schema["tags"]] == ["board", "movement", "rotation", "probes"]
    assert schema["paths"]["/reachability"]["post"]["tags"] == ["movement"]
    assert schema["paths"]["/probes/{probe_id}/move"]["post"]["tags"] == ["probes"]
