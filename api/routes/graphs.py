"""
Graph lifecycle routes: build a graph from dependency facts, list, fetch, merge and delete stored graphs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.requests import BuildGraphRequest, MergeGraphsRequest
from api.responses import GraphCreated, GraphListResponse, GraphSummaryResponse
from api.routes.common import get_graph_store, load_graph_or_404
from api.routes.exception import handle_exceptions
from engine.graph.builder import BuildOptions, GraphBuilder
from engine.graph.models import Graph
from engine.graph.report import format_graph_overview, graph_overview
from store.graphs import GraphStore, summarise

log = logging.getLogger(__name__)

router = APIRouter(tags=["Graphs"])


@router.post("/graphs", summary="Build and store a dependency graph from extracted facts")
@handle_exceptions
async def create_graph(req: BuildGraphRequest, store: GraphStore = Depends(get_graph_store)) -> GraphCreated:
    facts = [f.to_fact() for f in req.facts]
    graph = GraphBuilder().build(
        facts,
        BuildOptions(
            name=req.name,
            source_kind=req.source_kind,
            source_location=req.source_location,
        ),
    )
    await store.save(graph)
    log.info("Built graph %s from %d facts", graph.id, len(facts))
    return GraphCreated(graph_id=graph.id, node_count=len(graph.nodes), edge_count=len(graph.edges))


@router.get("/graphs", summary="List stored graphs, newest first")
@handle_exceptions
async def list_graphs(q: Optional[str] = None, store: GraphStore = Depends(get_graph_store)) -> GraphListResponse:
    if q:
        summaries = [summarise(g) for g in await store.search(q)]
    else:
        summaries = await store.list()
    return GraphListResponse(graphs=[GraphSummaryResponse(**s.to_dict()) for s in summaries])


@router.post("/graphs/merge", summary="Merge stored graphs into a new graph")
@handle_exceptions
async def merge_graphs(req: MergeGraphsRequest, store: GraphStore = Depends(get_graph_store)) -> GraphCreated:
    graphs: List[Graph] = []
    missing: List[str] = []
    for graph_id in req.graph_ids:
        graph = await store.load(graph_id)
        if graph is None:
            missing.append(graph_id)
        else:
            graphs.append(graph)
    if missing:
        raise HTTPException(status_code=404, detail=f"Graphs not found: {', '.join(missing)}")

    merged = GraphBuilder().merge(graphs, req.name)
    await store.save(merged)
    return GraphCreated(graph_id=merged.id, node_count=len(merged.nodes), edge_count=len(merged.edges))


@router.get("/graphs/{graph_id}", summary="Fetch a stored graph")
@handle_exceptions
async def get_graph(graph_id: str, store: GraphStore = Depends(get_graph_store)) -> Dict[str, Any]:
    graph = await load_graph_or_404(store, graph_id)
    return {"graph": graph.to_dict()}


@router.get("/graphs/{graph_id}/overview", summary="Graph counts with optional node and edge listings")
@handle_exceptions
async def get_graph_overview(
    graph_id: str,
    include_nodes: bool = False,
    include_edges: bool = False,
    node_filter: Optional[str] = None,
    include_report: bool = False,
    store: GraphStore = Depends(get_graph_store),
) -> Dict[str, Any]:
    graph = await load_graph_or_404(store, graph_id)
    overview = graph_overview(
        graph,
        include_nodes=include_nodes,
        include_edges=include_edges,
        node_filter=node_filter,
    )
    if include_report:
        return {**overview, "report": format_graph_overview(overview)}
    return overview


@router.delete("/graphs/{graph_id}", summary="Delete a stored graph")
@handle_exceptions
async def delete_graph(graph_id: str, store: GraphStore = Depends(get_graph_store)) -> Dict[str, Any]:
    if not await store.delete(graph_id):
        raise HTTPException(status_code=404, detail=f"Graph not found: {graph_id}")
    return {"success": True, "graph_id": graph_id}
