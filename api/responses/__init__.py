"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class GraphCreated(BaseModel):
    graph_id: str
    node_count: int
    edge_count: int


class GraphSummaryResponse(BaseModel):
    id: str
    name: str
    source_kind: str
    source_location: str
    created_at: str
    node_count: int
    edge_count: int


class GraphListResponse(BaseModel):
    graphs: List[GraphSummaryResponse]


class AnalysisResponse(BaseModel):
    statistics: Dict[str, Any]
    cycles: Optional[Dict[str, Any]] = None
