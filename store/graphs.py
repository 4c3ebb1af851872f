"""
Graph persistence on top of the key-value store client.

Graphs are stored as JSON documents, one key per graph. Every load returns a
freshly decoded snapshot, so analyzers holding an earlier copy never see a
later overwrite.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config import settings
from engine.graph.models import Graph
from store import keys
from store.client import redis_delete, redis_get, redis_scan, redis_set

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSummary:
    id: str
    name: str
    source_kind: str
    source_location: str
    created_at: str
    node_count: int
    edge_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "source_kind": self.source_kind,
            "source_location": self.source_location,
            "created_at": self.created_at,
            "node_count": self.node_count,
            "edge_count": self.edge_count,
        }


def summarise(graph: Graph) -> GraphSummary:
    return GraphSummary(
        id=graph.id,
        name=graph.name,
        source_kind=graph.metadata.source_kind.value,
        source_location=graph.metadata.source_location,
        created_at=graph.metadata.created_at.isoformat(),
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
    )


def _decode(key: str, raw: Optional[str]) -> Optional[Graph]:
    if not raw:
        return None
    try:
        return Graph.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as exc:
        log.warning("Discarding unreadable graph payload at %s: %s", key, exc)
        return None


class GraphStore:
    def __init__(self, ttl: Optional[int] = None) -> None:
        self._ttl = ttl if ttl is not None else settings.graph_ttl

    async def save(self, graph: Graph) -> None:
        await redis_set(keys.graph(graph.id), json.dumps(graph.to_dict()), ttl=self._ttl)
        log.info("Saved graph %s (%d nodes, %d edges)", graph.id, len(graph.nodes), len(graph.edges))

    async def load(self, graph_id: str) -> Optional[Graph]:
        key = keys.graph(graph_id)
        return _decode(key, await redis_get(key))

    async def _load_all(self) -> List[Graph]:
        graphs: List[Graph] = []
        for key in await redis_scan(keys.graph_pattern()):
            graph = _decode(key, await redis_get(key))
            if graph is not None:
                graphs.append(graph)
        graphs.sort(key=lambda g: g.metadata.created_at, reverse=True)
        return graphs

    async def list(self) -> List[GraphSummary]:
        return [summarise(g) for g in await self._load_all()]

    async def delete(self, graph_id: str) -> bool:
        deleted = await redis_delete(keys.graph(graph_id))
        if deleted:
            log.info("Deleted graph %s", graph_id)
        return deleted

    async def search(self, query: str) -> List[Graph]:
        needle = query.lower()
        return [g for g in await self._load_all() if needle in g.name.lower()]
