"""
Constants and configuration for the dependency graph engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Optional

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
# 0 keeps graphs until explicitly deleted
GRAPH_TTL: int = int(os.getenv("GRAPH_TTL", "0"))

DEPGRAPH_API_HOST = os.getenv("DEPGRAPH_API_HOST", "0.0.0.0")
DEPGRAPH_API_PORT = int(os.getenv("DEPGRAPH_API_PORT", "4322"))

# blast radius impact bands; each comparison is a strict ">"
IMPACT_RATIO_CRITICAL = 0.5
IMPACT_RATIO_HIGH = 0.25
IMPACT_RATIO_MEDIUM = 0.1

MERGED_SOURCE_LOCATION = "merged"
HEALTH_PATH = "/health"


class Settings(BaseSettings):
    # statistics / reporting
    statistics_top_connected: int = 5
    report_max_nodes: int = 20

    # store behaviour
    graph_ttl: Optional[int] = GRAPH_TTL or None
    store_redis_retry_cooldown_seconds: float = 10.0
    store_fallback_max_items: int = 10_000
    store_op_timeout_seconds: float = 0.5

    api_host: str = DEPGRAPH_API_HOST
    api_port: int = DEPGRAPH_API_PORT
    log_level: str = "info"

    model_config = {
        "env_prefix": "DEPGRAPH_",
        "extra": "ignore",
    }


settings = Settings()
