"""Internal async helpers shared by async modules."""

from __future__ import annotations

import inspect
import logging
from typing import Any

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _aclose_quietly(resource: Any) -> None:
    """Close a sync or async resource, logging instead of raising on failure."""
    if resource is None:
        return
    close = getattr(resource, "close", None)
    if not callable(close):
        return
    try:
        await _maybe_await(close())
    except Exception as exc:
        logger.error("Failed to close %s: %s", type(resource).__name__, exc)
