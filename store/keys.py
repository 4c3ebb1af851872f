"""
Key layout for graph records in the key-value store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

_PREFIX = "dg"


def graph(graph_id: str) -> str:
    return f"{_PREFIX}:graph:{graph_id}"


def graph_pattern() -> str:
    return f"{_PREFIX}:graph:*"
