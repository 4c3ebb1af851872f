import os
import sys

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import main as app_main
from api.routes.common import get_graph_store
from engine.graph.builder import build_graph
from store import client as store_client
from store.graphs import GraphStore
from helpers import fact


@pytest.fixture(autouse=True)
def in_memory_store(monkeypatch):
    """Force every store call onto the in-memory fallback and wipe it around
    each test so no test attempts a network connection.
    """
    store_client._fallback.clear()

    async def no_redis():
        store_client._using_fallback = True
        return None

    monkeypatch.setattr(store_client, "get_redis", no_redis)

    yield

    store_client._fallback.clear()


@pytest.fixture
def graph_store():
    return GraphStore()


@pytest.fixture
def api_app(graph_store):
    app_main.app.dependency_overrides[get_graph_store] = lambda: graph_store
    yield app_main.app
    app_main.app.dependency_overrides.clear()


@pytest.fixture
def service_graph():
    # web -> api -> {db, cache, queue}; worker -> {queue, db}
    return build_graph(
        [
            fact("web", "api"),
            fact("api", "db"),
            fact("api", "cache"),
            fact("api", "queue"),
            fact("worker", "queue"),
            fact("worker", "db"),
        ],
        name="services",
    )
