import pytest
import httpx
from httpx import ASGITransport
from asgi_lifespan import LifespanManager
from pathrouter.core.admin_router import AdminMount, AdminRouter
from pathrouter.core.route_provider import StaticRouteProvider
from pathrouter.core.router_app import RouterApp
from pathrouter.core.routing_table import Router
from tests.fixtures.mock_endpoints import echo_route_endpoint

ROUTE_DEFINITIONS = [
    ("users/login", "users#login"),
    ("users/:id", "users#show", {"role": "member"}),
]


def build_app():
    router = Router(provider=StaticRouteProvider(ROUTE_DEFINITIONS), endpoint=echo_route_endpoint)
    router.build_routes()
    return AdminMount(AdminRouter(router), RouterApp(router))


@pytest.mark.anyio
async def test_admin_endpoints():
    app = build_app()

    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            res = await client.get("/__health")
            assert res.status_code == 200
            assert "ok" in res.text.lower()

            res = await client.get("/__routes")
            assert res.status_code == 200
            assert res.json() == [
                {"pattern": "/users/login", "target": {"controller": "users", "action": "login"}},
                {"pattern": "/users/:id",
                 "target": {"controller": "users", "action": "show", "role": "member"}},
            ]

            res = await client.get("/__unknown")
            assert res.status_code == 404


@pytest.mark.anyio
async def test_admin_match_endpoint():
    app = build_app()

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        res = await client.get("/__match", params={"path": "users/7"})
        assert res.status_code == 200
        assert res.json() == {
            "path": "users/7",
            "matched": True,
            "pattern": "/users/:id",
            "target": {"controller": "users", "action": "show", "role": "member", "id": "7"},
        }

        res = await client.get("/__match", params={"path": "/nothing/here/at/all"})
        assert res.status_code == 404
        assert res.json()["matched"] is False

        res = await client.get("/__match")
        assert res.status_code == 400


@pytest.mark.anyio
async def test_metrics_endpoint_exposes_prometheus_data():
    app = build_app()

    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            for _ in range(3):
                res = await client.get("/users/1")
                assert res.status_code == 200
            res = await client.get("/missing/route/entirely")
            assert res.status_code == 404

            res = await client.get("/__metrics")
            assert res.status_code == 200
            body = res.text

            assert "router_matches_total" in body
            assert "router_misses_total" in body
            assert "router_registered_routes 2.0" in body
            assert 'pattern="/users/:id"' in body


@pytest.mark.anyio
async def test_non_admin_paths_go_to_router_app():
    app = build_app()

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        res = await client.get("/users/login")

    assert res.status_code == 200
    assert res.json()["route"] == "/users/login"
