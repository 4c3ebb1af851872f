"""
Graph analyzer answering blast radius, coupling, cycle and statistics queries over an immutable dependency graph snapshot.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from collections import Counter, deque
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Set, Tuple

from config import settings
from engine.enums import CycleSeverity, ImpactLevel
from engine.exceptions import GraphContractError
from engine.graph.models import (
    BlastRadiusResult,
    CouplingResult,
    CycleResult,
    Graph,
    Node,
    NodeConnections,
    Statistics,
)

Adjacency = Mapping[str, Tuple[str, ...]]

NOT_ENOUGH_NODES_REASON = "Need at least 2 nodes to analyze coupling"
NO_COUPLING_REASON = "No direct coupling found between the selected nodes"


def _build_adjacency(graph: Graph, reverse: bool) -> Adjacency:
    adj: Dict[str, List[str]] = {node.id: [] for node in graph.nodes}
    for edge in graph.edges:
        frm, to = (edge.target, edge.source) if reverse else (edge.source, edge.target)
        adj.setdefault(frm, []).append(to)
    return MappingProxyType({k: tuple(v) for k, v in adj.items()})


def _intersect(sets: Sequence[Set[str]]) -> Set[str]:
    if not sets:
        return set()
    result = set(sets[0])
    for other in sets[1:]:
        result &= other
    return result


class GraphAnalyzer:
    def __init__(self, graph: Graph) -> None:
        if not isinstance(graph, Graph):
            raise GraphContractError(f"expected Graph, got {type(graph).__name__}")
        self._graph = graph
        self._forward: Adjacency = _build_adjacency(graph, reverse=False)
        self._reverse: Adjacency = _build_adjacency(graph, reverse=True)
        self._nodes: Mapping[str, Node] = MappingProxyType({n.id: n for n in graph.nodes})

    @property
    def graph(self) -> Graph:
        return self._graph

    def _nodes_in_graph_order(self, ids: Set[str]) -> Tuple[Node, ...]:
        return tuple(n for n in self._graph.nodes if n.id in ids)

    def _closure(self, start: str, adjacency: Adjacency) -> Set[str]:
        result: Set[str] = set()
        stack: List[str] = [start]
        while stack:
            current = stack.pop()
            for neighbor in adjacency.get(current, ()):
                if neighbor not in result:
                    result.add(neighbor)
                    stack.append(neighbor)
        return result

    def dependency_closure(self, node_id: str) -> Set[str]:
        """Every node ``node_id`` depends on, directly or transitively."""
        return self._closure(node_id, self._forward)

    def dependent_closure(self, node_id: str) -> Set[str]:
        """Every node that depends on ``node_id``, directly or transitively."""
        return self._closure(node_id, self._reverse)

    def get_blast_radius(self, node_id: str) -> BlastRadiusResult:
        """Nodes that break when ``node_id`` fails.

        Walks the reverse adjacency breadth-first. The failing node itself is
        never part of ``affected_nodes``, even when a cycle leads back to it,
        but edges pointing at it are kept in ``affected_edges``.
        """
        if not isinstance(node_id, str):
            raise GraphContractError(f"node_id must be a string, got {type(node_id).__name__}")

        affected: Set[str] = set()
        queue: deque[str] = deque([node_id])
        while queue:
            current = queue.popleft()
            for dependent in self._reverse.get(current, ()):
                if dependent != node_id and dependent not in affected:
                    affected.add(dependent)
                    queue.append(dependent)

        affected_nodes = self._nodes_in_graph_order(affected)
        affected_edges = tuple(
            e
            for e in self._graph.edges
            if e.source in affected or e.target in affected or e.target == node_id
        )

        total = len(self._graph.nodes)
        ratio = len(affected_nodes) / total if total else 0.0

        return BlastRadiusResult(
            target_node=node_id,
            affected_nodes=affected_nodes,
            affected_edges=affected_edges,
            impact_level=ImpactLevel.from_ratio(ratio),
        )

    def find_coupling_reason(self, node_ids: Sequence[str]) -> CouplingResult:
        if isinstance(node_ids, str) or not isinstance(node_ids, Sequence):
            raise GraphContractError("node_ids must be a sequence of node id strings")
        ids = tuple(node_ids)

        if len(ids) < 2:
            return CouplingResult(
                nodes=ids,
                shared_dependencies=(),
                coupling_strength=0,
                reasons=(NOT_ENOUGH_NODES_REASON,),
            )

        shared_deps = _intersect([self.dependency_closure(i) for i in ids])
        shared_dependents = _intersect([self.dependent_closure(i) for i in ids])
        dependency_nodes = self._nodes_in_graph_order(shared_deps)
        dependent_nodes = self._nodes_in_graph_order(shared_dependents)

        total = len(self._graph.nodes)
        # not clamped: shared dependencies and dependents may overlap in a cycle
        strength = (len(dependency_nodes) + len(shared_dependents)) / total if total else 0

        reasons: List[str] = []
        if dependency_nodes:
            names = ", ".join(n.display_name for n in dependency_nodes)
            reasons.append(f"Shared dependencies: {names}")
        if shared_dependents:
            names = ", ".join(
                self._nodes[i].display_name if i in self._nodes else i
                for i in self._ordered_ids(shared_dependents)
            )
            reasons.append(f"Common dependents: {names}")

        for idx, first in enumerate(ids):
            for second in ids[idx + 1:]:
                if self._directly_connected(first, second):
                    reasons.append(f"Direct dependency between {first} and {second}")

        if not reasons:
            reasons.append(NO_COUPLING_REASON)

        return CouplingResult(
            nodes=ids,
            shared_dependencies=dependency_nodes,
            coupling_strength=strength,
            reasons=tuple(reasons),
            shared_dependents=dependent_nodes,
        )

    def _ordered_ids(self, ids: Set[str]) -> List[str]:
        known = [n.id for n in self._graph.nodes if n.id in ids]
        return known + sorted(ids - set(known))

    def _directly_connected(self, a: str, b: str) -> bool:
        return b in self._forward.get(a, ()) or a in self._forward.get(b, ())

    def detect_cycles(self) -> CycleResult:
        """Depth-first search reporting one cycle per back-edge.

        Overlapping cycles are all reported; nothing is deduplicated. An
        explicit frame stack replaces recursion so deep graphs do not hit the
        interpreter recursion limit.
        """
        cycles: List[Tuple[Node, ...]] = []
        visited: Set[str] = set()
        path: List[str] = []
        position: Dict[str, int] = {}

        for root in self._graph.nodes:
            if root.id in visited:
                continue

            frames: List[Tuple[str, Iterator[str]]] = []

            def enter(node_id: str) -> None:
                visited.add(node_id)
                position[node_id] = len(path)
                path.append(node_id)
                frames.append((node_id, iter(self._forward.get(node_id, ()))))

            enter(root.id)
            while frames:
                node_id, neighbors = frames[-1]
                neighbor = next(neighbors, None)
                if neighbor is None:
                    frames.pop()
                    path.pop()
                    del position[node_id]
                    continue
                if neighbor not in visited:
                    enter(neighbor)
                elif neighbor in position:
                    cycle = tuple(
                        self._nodes[i] for i in path[position[neighbor]:] if i in self._nodes
                    )
                    if cycle:
                        cycles.append(cycle)

        return CycleResult(
            cycles=tuple(cycles),
            severity=CycleSeverity.error if cycles else CycleSeverity.warning,
        )

    def get_statistics(self) -> Statistics:
        node_types = Counter(n.type.value for n in self._graph.nodes)
        edge_types = Counter(e.kind.value for e in self._graph.edges)

        connections = [
            NodeConnections(
                node=node,
                inbound=len(self._reverse.get(node.id, ())),
                outbound=len(self._forward.get(node.id, ())),
            )
            for node in self._graph.nodes
        ]
        # sorted() is stable, so ties keep graph node order
        most_connected = sorted(connections, key=lambda c: c.degree, reverse=True)

        return Statistics(
            total_nodes=len(self._graph.nodes),
            total_edges=len(self._graph.edges),
            node_types=dict(node_types),
            edge_types=dict(edge_types),
            most_connected=tuple(most_connected[: settings.statistics_top_connected]),
        )
