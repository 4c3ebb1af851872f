"""
Graph builder that turns flat dependency facts into a deduplicated node/edge snapshot, and merges snapshots together.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Set, Tuple

from config import MERGED_SOURCE_LOCATION
from engine.enums import DependencyKind, NodeType, SourceKind
from engine.exceptions import GraphContractError
from engine.graph.models import DependencyFact, Edge, Graph, GraphMetadata, Node

_WORKLOAD_PREFIXES = ("Deployment/", "StatefulSet/", "DaemonSet/")
# ConfigMaps and Secrets are folded into the workload type they configure
_WORKLOAD_RESOURCE_PREFIXES = ("ConfigMap/", "Secret/")
_DATABASE_MARKERS = ("db", "rds", "database")
_QUEUE_MARKERS = ("queue", "sqs", "sns")
_DOCKER_KINDS = (DependencyKind.docker_depends_on, DependencyKind.docker_network)
_NPM_KINDS = (DependencyKind.npm_dependency, DependencyKind.npm_dev_dependency)

EdgeKey = Tuple[str, str, DependencyKind]


@dataclass(frozen=True)
class BuildOptions:
    name: str
    source_kind: SourceKind = SourceKind.local
    source_location: str = ""


def _new_id() -> str:
    return str(uuid.uuid4())


def infer_node_type(node_id: str, kind: DependencyKind) -> NodeType:
    if node_id.startswith(_WORKLOAD_PREFIXES):
        return NodeType.k8s_deployment
    if node_id.startswith("Service/"):
        return NodeType.k8s_service
    if node_id.startswith(_WORKLOAD_RESOURCE_PREFIXES):
        return NodeType.k8s_deployment

    if kind == DependencyKind.terraform_resource:
        # plain substring match: "mydbthing" is a database
        if any(marker in node_id for marker in _DATABASE_MARKERS):
            return NodeType.database
        if any(marker in node_id for marker in _QUEUE_MARKERS):
            return NodeType.queue
        return NodeType.terraform_resource

    if kind in _DOCKER_KINDS:
        return NodeType.docker_service
    if kind in _NPM_KINDS:
        return NodeType.npm_package
    if kind == DependencyKind.codeowner:
        return NodeType.team if node_id.startswith("@") else NodeType.service

    return NodeType.unknown


def extract_display_name(node_id: str) -> str:
    if "/" in node_id:
        return node_id.rsplit("/", 1)[1] or node_id
    if "." in node_id:
        return node_id.rsplit(".", 1)[1] or node_id
    return node_id


def _create_node(node_id: str, kind: DependencyKind) -> Node:
    return Node(
        id=node_id,
        display_name=extract_display_name(node_id),
        type=infer_node_type(node_id, kind),
        metadata={"original_id": node_id},
    )


def _checked_facts(facts: Iterable[DependencyFact]) -> List[DependencyFact]:
    usable: List[DependencyFact] = []
    for fact in facts:
        if not isinstance(fact, DependencyFact):
            raise GraphContractError(f"expected DependencyFact, got {type(fact).__name__}")
        if not fact.source or not fact.target:
            continue
        usable.append(fact)
    return usable


class GraphBuilder:
    def build(self, facts: Iterable[DependencyFact], options: BuildOptions) -> Graph:
        usable = _checked_facts(facts)

        nodes: Dict[str, Node] = {}
        for fact in usable:
            if fact.source not in nodes:
                nodes[fact.source] = _create_node(fact.source, fact.kind)
            if fact.target not in nodes:
                nodes[fact.target] = _create_node(fact.target, fact.kind)

        edges: List[Edge] = []
        seen: Set[EdgeKey] = set()
        for fact in usable:
            key = (fact.source, fact.target, fact.kind)
            if key in seen:
                continue
            seen.add(key)
            edges.append(
                Edge(
                    id=_new_id(),
                    source=fact.source,
                    target=fact.target,
                    kind=fact.kind,
                    metadata=dict(fact.metadata),
                )
            )

        return Graph(
            id=_new_id(),
            name=options.name,
            nodes=tuple(nodes.values()),
            edges=tuple(edges),
            metadata=GraphMetadata(
                created_at=datetime.now(timezone.utc),
                source_kind=options.source_kind,
                source_location=options.source_location,
            ),
        )

    def merge(self, graphs: Iterable[Graph], name: str) -> Graph:
        nodes: Dict[str, Node] = {}
        edges: List[Edge] = []
        seen: Set[EdgeKey] = set()

        for graph in graphs:
            if not isinstance(graph, Graph):
                raise GraphContractError(f"expected Graph, got {type(graph).__name__}")
            for node in graph.nodes:
                nodes.setdefault(node.id, node)
            for edge in graph.edges:
                if edge.key in seen:
                    continue
                seen.add(edge.key)
                edges.append(edge)

        return Graph(
            id=_new_id(),
            name=name,
            nodes=tuple(nodes.values()),
            edges=tuple(edges),
            metadata=GraphMetadata(
                created_at=datetime.now(timezone.utc),
                source_kind=SourceKind.local,
                source_location=MERGED_SOURCE_LOCATION,
            ),
        )


def build_graph(
    facts: Iterable[DependencyFact],
    name: str,
    source_kind: SourceKind = SourceKind.local,
    source_location: str = "",
) -> Graph:
    return GraphBuilder().build(
        facts, BuildOptions(name=name, source_kind=source_kind, source_location=source_location)
    )


def merge_graphs(graphs: Iterable[Graph], name: str) -> Graph:
    return GraphBuilder().merge(graphs, name)
