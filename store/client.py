"""
Client code for Redis access, with in-memory fallback if Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import time
from typing import Any, Optional

import redis.asyncio as aioredis

from config import REDIS_URL, settings

log = logging.getLogger(__name__)

_redis_client: Any = None
_fallback: dict[str, str] = {}
_using_fallback = False
_init_lock = asyncio.Lock()
_retry_after_monotonic: float = 0.0


def _op_timeout() -> float:
    return float(settings.store_op_timeout_seconds)


def _fallback_set(key: str, value: str) -> None:
    if key in _fallback or len(_fallback) < settings.store_fallback_max_items:
        _fallback[key] = value
    else:
        log.warning("In-memory fallback full (%d items); dropping %s", len(_fallback), key)


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        _using_fallback = True
        return None

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            _using_fallback = True
            return None
        try:
            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=_op_timeout(),
                socket_timeout=_op_timeout(),
            )
            await asyncio.wait_for(client.ping(), timeout=_op_timeout())
            _redis_client = client
            _retry_after_monotonic = 0.0
            _using_fallback = False
            log.info("Redis connected: %s", REDIS_URL)
            return _redis_client
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(
                0.0, settings.store_redis_retry_cooldown_seconds
            )
            if not _using_fallback:
                log.warning("Redis unavailable (%s) - using in-memory fallback", exc)
                _using_fallback = True
            return None


async def redis_get(key: str) -> Optional[str]:
    client = await get_redis()
    if client is None:
        return _fallback.get(key)
    try:
        return await asyncio.wait_for(client.get(key), timeout=_op_timeout())
    except Exception as exc:
        log.debug("Redis GET error %s: %s", key, exc)
        return _fallback.get(key)


async def redis_set(key: str, value: str, ttl: Optional[int] = None) -> None:
    client = await get_redis()
    if client is None:
        _fallback_set(key, value)
        return
    try:
        if ttl:
            await asyncio.wait_for(client.setex(key, ttl, value), timeout=_op_timeout())
        else:
            await asyncio.wait_for(client.set(key, value), timeout=_op_timeout())
    except Exception as exc:
        log.debug("Redis SET error %s: %s", key, exc)
        _fallback_set(key, value)


async def redis_delete(key: str) -> bool:
    client = await get_redis()
    if client is None:
        return _fallback.pop(key, None) is not None
    try:
        removed = await asyncio.wait_for(client.delete(key), timeout=_op_timeout())
        return bool(removed)
    except Exception as exc:
        log.debug("Redis DEL error %s: %s", key, exc)
        return _fallback.pop(key, None) is not None


async def redis_scan(pattern: str) -> list[str]:
    client = await get_redis()
    if client is None:
        return [k for k in _fallback if fnmatch.fnmatch(k, pattern)]
    try:
        async def _scan_keys() -> list[str]:
            return [key async for key in client.scan_iter(pattern)]

        return await asyncio.wait_for(_scan_keys(), timeout=1.0)
    except Exception as exc:
        log.debug("Redis SCAN error %s: %s", pattern, exc)
        return [k for k in _fallback if fnmatch.fnmatch(k, pattern)]


async def close_redis() -> None:
    global _redis_client

    client, _redis_client = _redis_client, None
    if client is None:
        return
    try:
        await client.aclose()
    except Exception as exc:
        log.debug("Redis close error: %s", exc)


def is_using_fallback() -> bool:
    return _using_fallback
