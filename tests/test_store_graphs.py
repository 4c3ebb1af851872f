"""
Test Suite for the Graph Store

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from engine.graph.builder import build_graph
from store import keys
from store.client import _fallback, redis_set
from store.graphs import GraphStore
from helpers import fact


def _graph_at(name, minutes):
    graph = build_graph([fact(f"{name}-app", f"{name}-db")], name=name)
    created = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return dataclasses.replace(graph, metadata=dataclasses.replace(graph.metadata, created_at=created))


@pytest.mark.asyncio
async def test_save_and_load_round_trip(service_graph):
    store = GraphStore()
    await store.save(service_graph)
    loaded = await store.load(service_graph.id)
    assert loaded == service_graph
    assert loaded is not service_graph
    assert keys.graph(service_graph.id) in _fallback


@pytest.mark.asyncio
async def test_load_missing_returns_none():
    assert await GraphStore().load("nope") is None


@pytest.mark.asyncio
async def test_list_is_newest_first_with_counts():
    store = GraphStore()
    older, newer = _graph_at("older", 0), _graph_at("newer", 5)
    await store.save(older)
    await store.save(newer)

    summaries = await store.list()
    assert [s.name for s in summaries] == ["newer", "older"]
    assert summaries[0].node_count == 2
    assert summaries[0].edge_count == 1
    assert summaries[0].to_dict()["source_kind"] == "local"


@pytest.mark.asyncio
async def test_delete_reports_whether_anything_was_removed(service_graph):
    store = GraphStore()
    await store.save(service_graph)
    assert await store.delete(service_graph.id) is True
    assert await store.delete(service_graph.id) is False
    assert await store.load(service_graph.id) is None


@pytest.mark.asyncio
async def test_search_matches_name_case_insensitively():
    store = GraphStore()
    await store.save(_graph_at("Payments Platform", 0))
    await store.save(_graph_at("checkout", 1))
    found = await store.search("payments")
    assert [g.name for g in found] == ["Payments Platform"]


@pytest.mark.asyncio
async def test_unreadable_payload_is_treated_as_missing():
    await redis_set(keys.graph("broken"), "{not json")
    store = GraphStore()
    assert await store.load("broken") is None
    assert await store.list() == []


@pytest.mark.asyncio
async def test_loaded_snapshot_is_unaffected_by_overwrite(service_graph):
    store = GraphStore()
    await store.save(service_graph)
    snapshot = await store.load(service_graph.id)

    await store.save(dataclasses.replace(service_graph, name="overwritten", nodes=(), edges=()))
    assert snapshot.name == "services"
    assert len(snapshot.nodes) == 6
    assert (await store.load(service_graph.id)).name == "overwritten"
