"""
Entry point for the Dependency Graph Engine API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import settings
from store.client import close_redis, get_redis, is_using_fallback
from store.graphs import GraphStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.graph_store = GraphStore()
    await get_redis()
    log.info("Graph store backend: %s", "fallback" if is_using_fallback() else "redis")
    try:
        yield
    finally:
        await close_redis()


app = FastAPI(
    title="Dependency Graph Engine",
    description="Builds dependency graphs from infrastructure facts and answers blast radius, coupling and cycle questions.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
        access_log=True,
    )
