"""
Shared utilities and dependencies for API route modules.

The graph store is constructed once by the application lifespan and kept on
``app.state``; routes receive it through :func:`get_graph_store` as a FastAPI
dependency. The lookup helpers turn missing graphs or nodes into HTTP 404
responses, so the engine itself never has to validate ids.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Iterable

from fastapi import HTTPException, Request

from engine.graph.models import Graph
from store.graphs import GraphStore


def get_graph_store(request: Request) -> GraphStore:
    return request.app.state.graph_store


async def load_graph_or_404(store: GraphStore, graph_id: str) -> Graph:
    graph = await store.load(graph_id)
    if graph is None:
        raise HTTPException(status_code=404, detail=f"Graph not found: {graph_id}")
    return graph


def require_nodes(graph: Graph, node_ids: Iterable[str]) -> None:
    missing = [i for i in node_ids if not graph.has_node(i)]
    if len(missing) == 1:
        raise HTTPException(status_code=404, detail=f"Node not found in graph: {missing[0]}")
    if missing:
        raise HTTPException(status_code=404, detail=f"Nodes not found in graph: {', '.join(missing)}")
