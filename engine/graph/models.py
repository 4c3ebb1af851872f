"""
Data records for dependency facts, graph snapshots and analysis results.

Graphs are frozen once built: nodes and edges are held in tuples and every
record is a frozen dataclass, so a snapshot can be shared between analyzers
without copying.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from engine.enums import CycleSeverity, DependencyKind, ImpactLevel, NodeType, SourceKind


@dataclass(frozen=True)
class DependencyFact:
    source: str
    target: str
    kind: DependencyKind
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> DependencyFact:
        return cls(
            source=str(raw.get("source") or ""),
            target=str(raw.get("target") or ""),
            kind=DependencyKind.coerce(raw.get("kind", raw.get("type"))),
            metadata=dict(raw.get("metadata") or {}),
        )


@dataclass(frozen=True)
class Node:
    id: str
    display_name: str = field(compare=False)
    type: NodeType = field(compare=False)
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "type": self.type.value,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Node:
        node_type = raw.get("type")
        return cls(
            id=raw["id"],
            display_name=raw.get("display_name") or raw["id"],
            type=NodeType(node_type) if node_type in NodeType._value2member_map_ else NodeType.unknown,
            metadata=dict(raw.get("metadata") or {}),
        )


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    kind: DependencyKind
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def key(self) -> Tuple[str, str, DependencyKind]:
        return (self.source, self.target, self.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Edge:
        return cls(
            id=raw["id"],
            source=raw["source"],
            target=raw["target"],
            kind=DependencyKind.coerce(raw.get("kind")),
            metadata=dict(raw.get("metadata") or {}),
        )


@dataclass(frozen=True)
class GraphMetadata:
    created_at: datetime
    source_kind: SourceKind = SourceKind.local
    source_location: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created_at": self.created_at.isoformat(),
            "source_kind": self.source_kind.value,
            "source_location": self.source_location,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> GraphMetadata:
        created = raw.get("created_at")
        kind = raw.get("source_kind")
        return cls(
            created_at=datetime.fromisoformat(created) if created else datetime.now(timezone.utc),
            source_kind=SourceKind(kind) if kind in SourceKind._value2member_map_ else SourceKind.local,
            source_location=raw.get("source_location") or "",
        )


@dataclass(frozen=True)
class Graph:
    id: str
    name: str
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    metadata: GraphMetadata

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Graph:
        return cls(
            id=raw["id"],
            name=raw.get("name") or "",
            nodes=tuple(Node.from_dict(n) for n in raw.get("nodes") or []),
            edges=tuple(Edge.from_dict(e) for e in raw.get("edges") or []),
            metadata=GraphMetadata.from_dict(raw.get("metadata") or {}),
        )


@dataclass(frozen=True)
class BlastRadiusResult:
    target_node: str
    affected_nodes: Tuple[Node, ...]
    affected_edges: Tuple[Edge, ...]
    impact_level: ImpactLevel

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_node": self.target_node,
            "affected_nodes": [n.to_dict() for n in self.affected_nodes],
            "affected_edges": [e.to_dict() for e in self.affected_edges],
            "impact_level": self.impact_level.value,
        }


@dataclass(frozen=True)
class CouplingResult:
    nodes: Tuple[str, ...]
    shared_dependencies: Tuple[Node, ...]
    coupling_strength: float
    reasons: Tuple[str, ...]
    shared_dependents: Tuple[Node, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "shared_dependencies": [n.to_dict() for n in self.shared_dependencies],
            "shared_dependents": [n.to_dict() for n in self.shared_dependents],
            "coupling_strength": self.coupling_strength,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class CycleResult:
    cycles: Tuple[Tuple[Node, ...], ...]
    severity: CycleSeverity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cycles": [[n.to_dict() for n in cycle] for cycle in self.cycles],
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class NodeConnections:
    node: Node
    inbound: int
    outbound: int

    @property
    def degree(self) -> int:
        return self.inbound + self.outbound

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node.to_dict(), "inbound": self.inbound, "outbound": self.outbound}


@dataclass(frozen=True)
class Statistics:
    total_nodes: int
    total_edges: int
    node_types: Dict[str, int]
    edge_types: Dict[str, int]
    most_connected: Tuple[NodeConnections, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "node_types": dict(self.node_types),
            "edge_types": dict(self.edge_types),
            "most_connected": [c.to_dict() for c in self.most_connected],
        }
