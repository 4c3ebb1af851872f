"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
uncaught exceptions into :class:`fastapi.HTTPException` responses:

* ``HTTPException`` raised by the handler propagates untouched;
* :class:`engine.exceptions.GraphContractError` becomes a ``400``;
* anything else becomes a ``500`` with the exception message as detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from engine.exceptions import GraphContractError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _translate(func: Callable[..., Any], exc: Exception) -> HTTPException:
    if isinstance(exc, GraphContractError):
        return HTTPException(status_code=400, detail=str(exc))
    log.exception("Unhandled error in %s", func.__name__)
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(func, exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _translate(func, exc) from exc

    return cast(F, sync_wrapper)
