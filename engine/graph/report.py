"""
Plain-text rendering of analysis results and graph overviews for chat and UI consumers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from config import settings
from engine.graph.models import BlastRadiusResult, CouplingResult, CycleResult, Graph


def format_blast_radius(result: BlastRadiusResult) -> str:
    lines: List[str] = [
        f"## Blast Radius Analysis for: {result.target_node}",
        "",
        f"**Impact Level:** {result.impact_level.value.upper()}",
        "",
    ]

    if not result.affected_nodes:
        lines.append("No other services would be directly affected.")
    else:
        lines.append(f"**Affected Services ({len(result.affected_nodes)}):**")
        for node in result.affected_nodes:
            lines.append(f"- {node.display_name} ({node.type.value})")

    lines.append("")
    lines.append(f"**Affected Connections:** {len(result.affected_edges)}")
    return "\n".join(lines)


def format_coupling(result: CouplingResult) -> str:
    lines: List[str] = [
        "## Coupling Analysis",
        "",
        f"**Analyzed Services:** {', '.join(result.nodes)}",
        "",
        f"**Coupling Strength:** {result.coupling_strength * 100:.1f}%",
        "",
    ]

    if result.shared_dependencies:
        lines.append("**Shared Dependencies:**")
        for dep in result.shared_dependencies:
            lines.append(f"- {dep.display_name} ({dep.type.value})")
        lines.append("")

    lines.append("**Coupling Reasons:**")
    for reason in result.reasons:
        lines.append(f"- {reason}")
    return "\n".join(lines)


def format_cycles(result: CycleResult) -> str:
    if not result.cycles:
        return "No circular dependencies found."

    lines: List[str] = [f"## Circular Dependencies ({len(result.cycles)})", ""]
    for cycle in result.cycles:
        ids = [n.id for n in cycle]
        # close the loop visually: a -> b -> a
        lines.append("- " + " -> ".join(ids + ids[:1]))
    return "\n".join(lines)


def graph_overview(
    graph: Graph,
    include_nodes: bool = False,
    include_edges: bool = False,
    node_filter: Optional[str] = None,
) -> Dict[str, Any]:
    overview: Dict[str, Any] = {
        "id": graph.id,
        "name": graph.name,
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "source_kind": graph.metadata.source_kind.value,
        "source_location": graph.metadata.source_location,
        "created_at": graph.metadata.created_at.isoformat(),
    }

    if include_nodes:
        nodes = graph.nodes
        if node_filter:
            needle = node_filter.lower()
            nodes = tuple(
                n for n in nodes if needle in n.display_name.lower() or needle in n.id.lower()
            )
        overview["nodes"] = [
            {"id": n.id, "display_name": n.display_name, "type": n.type.value} for n in nodes
        ]

    if include_edges:
        overview["edges"] = [
            {"source": e.source, "target": e.target, "kind": e.kind.value} for e in graph.edges
        ]

    return overview


def format_graph_overview(overview: Dict[str, Any]) -> str:
    lines: List[str] = [
        f"## Graph: {overview['name']}",
        "",
        f"- **ID:** {overview['id']}",
        f"- **Nodes:** {overview['node_count']}",
        f"- **Edges:** {overview['edge_count']}",
        f"- **Source:** {overview['source_kind']} ({overview['source_location']})",
        f"- **Created:** {overview['created_at']}",
    ]

    nodes = overview.get("nodes") or []
    if nodes:
        limit = settings.report_max_nodes
        lines.append("")
        lines.append("**Nodes:**")
        for node in nodes[:limit]:
            lines.append(f"- {node['display_name']} ({node['type']})")
        if len(nodes) > limit:
            lines.append(f"... and {len(nodes) - limit} more")

    return "\n".join(lines)
