from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from engine.enums import DependencyKind, SourceKind
from engine.graph.models import DependencyFact


class DependencyFactRequest(BaseModel):
    source: str
    target: str
    kind: str = DependencyKind.unknown.value
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_fact(self) -> DependencyFact:
        return DependencyFact(
            source=self.source,
            target=self.target,
            kind=DependencyKind.coerce(self.kind),
            metadata=dict(self.metadata),
        )


class BuildGraphRequest(BaseModel):
    name: str = Field(min_length=1)
    source_kind: SourceKind = SourceKind.local
    source_location: str = ""
    facts: List[DependencyFactRequest] = Field(default_factory=list)


class MergeGraphsRequest(BaseModel):
    name: str = Field(min_length=1)
    graph_ids: List[str] = Field(min_length=1)


class BlastRadiusRequest(BaseModel):
    node_id: str
    include_report: bool = False


class CouplingRequest(BaseModel):
    node_ids: List[str] = Field(min_length=2)
    include_report: bool = False
