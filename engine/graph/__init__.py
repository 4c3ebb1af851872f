"""
Dependency graph package exports.

This package builds deduplicated dependency graphs from extracted facts and
answers blast radius, coupling and cycle questions over them.
"""

from engine.graph.analyzer import GraphAnalyzer
from engine.graph.builder import BuildOptions, GraphBuilder, build_graph, merge_graphs
from engine.graph.models import (
    BlastRadiusResult,
    CouplingResult,
    CycleResult,
    DependencyFact,
    Edge,
    Graph,
    GraphMetadata,
    Node,
    NodeConnections,
    Statistics,
)

__all__ = [
    "GraphAnalyzer",
    "GraphBuilder",
    "BuildOptions",
    "build_graph",
    "merge_graphs",
    "BlastRadiusResult",
    "CouplingResult",
    "CycleResult",
    "DependencyFact",
    "Edge",
    "Graph",
    "GraphMetadata",
    "Node",
    "NodeConnections",
    "Statistics",
]
