"""Resource release helpers."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def close_quietly(resource: Any) -> None:
    """Close `resource` if it has `close()`; log and swallow close errors."""

    if resource is None:
        return
    close = getattr(resource, "close", None)
    if not callable(close):
        return
    try:
        close()
    except Exception as exc:
        logger.error("Failed to close %s: %s", type(resource).__name__, exc)


def close_all(*resources: Any) -> None:
    """Close resources in the given order (result set, statement, connection)."""

    for resource in resources:
        close_quietly(resource)
