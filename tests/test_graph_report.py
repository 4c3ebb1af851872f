"""
Test Suite for text rendering of analysis results

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.graph.analyzer import GraphAnalyzer
from engine.graph.builder import build_graph
from engine.graph.report import (
    format_blast_radius,
    format_coupling,
    format_cycles,
    format_graph_overview,
    graph_overview,
)
from helpers import fact


def test_format_blast_radius(service_graph):
    text = format_blast_radius(GraphAnalyzer(service_graph).get_blast_radius("db"))
    assert text.startswith("## Blast Radius Analysis for: db")
    assert "**Impact Level:** HIGH" in text
    assert "**Affected Services (3):**" in text
    assert "- api (docker_service)" in text
    assert text.endswith("**Affected Connections:** 6")


def test_format_blast_radius_for_leaf(service_graph):
    text = format_blast_radius(GraphAnalyzer(service_graph).get_blast_radius("web"))
    assert "No other services would be directly affected." in text


def test_format_coupling(service_graph):
    text = format_coupling(GraphAnalyzer(service_graph).find_coupling_reason(["api", "worker"]))
    assert "**Analyzed Services:** api, worker" in text
    assert "**Coupling Strength:** 33.3%" in text
    assert "- queue (docker_service)" in text
    assert text.endswith("- Shared dependencies: db, queue")


def test_format_cycles():
    analyzer = GraphAnalyzer(build_graph([fact("a", "b"), fact("b", "a")], name="c"))
    assert format_cycles(analyzer.detect_cycles()) == "## Circular Dependencies (1)\n\n- a -> b -> a"


def test_format_cycles_when_none(service_graph):
    assert format_cycles(GraphAnalyzer(service_graph).detect_cycles()) == "No circular dependencies found."


def test_graph_overview_filters_nodes(service_graph):
    overview = graph_overview(service_graph, include_nodes=True, node_filter="W")
    assert overview["node_count"] == 6
    assert [n["id"] for n in overview["nodes"]] == ["web", "worker"]
    assert "edges" not in overview

    with_edges = graph_overview(service_graph, include_edges=True)
    assert with_edges["edges"][0] == {"source": "web", "target": "api", "kind": "docker_depends_on"}


def test_format_graph_overview_truncates(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "report_max_nodes", 2)
    graph = build_graph([fact("a", "b"), fact("c", "d")], name="big")
    text = format_graph_overview(graph_overview(graph, include_nodes=True))
    assert text.startswith("## Graph: big")
    assert "- **Nodes:** 4" in text
    assert "- b (docker_service)" in text
    assert "- c (docker_service)" not in text
    assert text.endswith("... and 2 more")
