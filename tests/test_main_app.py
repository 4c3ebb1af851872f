"""
End-to-end tests through the ASGI app: routing, validation, health and store wiring.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI, Request

import main as app_main
from api.routes import health as health_route
from api.routes.common import get_graph_store
from store.graphs import GraphStore


def _client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


_FACTS = [
    {"source": "web", "target": "api", "kind": "docker_depends_on"},
    {"source": "api", "target": "db", "kind": "docker_depends_on"},
    {"source": "worker", "target": "db", "kind": "docker_depends_on"},
]


@pytest.mark.asyncio
async def test_build_then_query_blast_radius(api_app, graph_store):
    async with _client(api_app) as client:
        created = await client.post("/api/v1/graphs", json={"name": "compose", "facts": _FACTS})
        assert created.status_code == 200
        graph_id = created.json()["graph_id"]
        assert created.json()["node_count"] == 4

        resp = await client.post(f"/api/v1/graphs/{graph_id}/blast-radius", json={"node_id": "db"})
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert [n["id"] for n in result["affected_nodes"]] == ["web", "api", "worker"]
        assert result["impact_level"] == "critical"

        listing = await client.get("/api/v1/graphs")
        assert [g["id"] for g in listing.json()["graphs"]] == [graph_id]

    assert (await graph_store.load(graph_id)).name == "compose"


@pytest.mark.asyncio
async def test_coupling_with_single_node_is_rejected(api_app):
    async with _client(api_app) as client:
        created = await client.post("/api/v1/graphs", json={"name": "compose", "facts": _FACTS})
        graph_id = created.json()["graph_id"]
        resp = await client.post(f"/api/v1/graphs/{graph_id}/coupling", json={"node_ids": ["api"]})
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_unknown_graph_is_404(api_app):
    async with _client(api_app) as client:
        resp = await client.get("/api/v1/graphs/nope/analyze")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Graph not found: nope"


@pytest.mark.asyncio
async def test_health_reports_fallback_store(monkeypatch):
    async def no_redis():
        return None

    monkeypatch.setattr(health_route, "get_redis", no_redis)
    monkeypatch.setattr(health_route, "is_using_fallback", lambda: True)
    async with _client(app_main.app) as client:
        resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "store": "fallback"}


@pytest.mark.asyncio
async def test_lifespan_constructs_store_per_app(monkeypatch):
    closed = []

    async def no_redis():
        return None

    async def fake_close():
        closed.append(True)

    monkeypatch.setattr(app_main, "get_redis", no_redis)
    monkeypatch.setattr(app_main, "close_redis", fake_close)

    first, second = FastAPI(), FastAPI()
    async with app_main.lifespan(first), app_main.lifespan(second):
        store = get_graph_store(Request({"type": "http", "app": first}))
        assert isinstance(store, GraphStore)
        assert store is first.state.graph_store
        assert store is not second.state.graph_store
    assert closed == [True, True]
