"""
Analysis routes over stored graphs: statistics, cycles, blast radius and coupling.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.requests import BlastRadiusRequest, CouplingRequest
from api.responses import AnalysisResponse
from api.routes.common import get_graph_store, load_graph_or_404, require_nodes
from api.routes.exception import handle_exceptions
from engine.graph.analyzer import GraphAnalyzer
from engine.graph.report import format_blast_radius, format_coupling, format_cycles
from store.graphs import GraphStore

router = APIRouter(tags=["Analysis"])


@router.get("/graphs/{graph_id}/analyze", summary="Graph statistics and circular dependencies")
@handle_exceptions
async def analyze_graph(graph_id: str, store: GraphStore = Depends(get_graph_store)) -> AnalysisResponse:
    analyzer = GraphAnalyzer(await load_graph_or_404(store, graph_id))
    cycles = analyzer.detect_cycles()
    return AnalysisResponse(
        statistics=analyzer.get_statistics().to_dict(),
        cycles=cycles.to_dict() if cycles.cycles else None,
    )


@router.get("/graphs/{graph_id}/cycles", summary="Circular dependencies, one entry per back-edge")
@handle_exceptions
async def graph_cycles(
    graph_id: str, include_report: bool = False, store: GraphStore = Depends(get_graph_store)
) -> Dict[str, Any]:
    result = GraphAnalyzer(await load_graph_or_404(store, graph_id)).detect_cycles()
    payload: Dict[str, Any] = {"result": result.to_dict()}
    if include_report:
        payload["report"] = format_cycles(result)
    return payload


@router.post("/graphs/{graph_id}/blast-radius", summary="Nodes affected if the given node fails")
@handle_exceptions
async def blast_radius(
    graph_id: str, req: BlastRadiusRequest, store: GraphStore = Depends(get_graph_store)
) -> Dict[str, Any]:
    graph = await load_graph_or_404(store, graph_id)
    require_nodes(graph, [req.node_id])

    result = GraphAnalyzer(graph).get_blast_radius(req.node_id)
    payload: Dict[str, Any] = {"result": result.to_dict()}
    if req.include_report:
        payload["report"] = format_blast_radius(result)
    return payload


@router.post("/graphs/{graph_id}/coupling", summary="Why the given nodes are coupled")
@handle_exceptions
async def coupling(
    graph_id: str, req: CouplingRequest, store: GraphStore = Depends(get_graph_store)
) -> Dict[str, Any]:
    graph = await load_graph_or_404(store, graph_id)
    require_nodes(graph, req.node_ids)

    result = GraphAnalyzer(graph).find_coupling_reason(req.node_ids)
    payload: Dict[str, Any] = {"result": result.to_dict()}
    if req.include_report:
        payload["report"] = format_coupling(result)
    return payload
