"""Tie in-flight work to the lifetime of the client connection."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from fastapi import Request

from pod_job_tracker.errors import RequestCancelledError

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.5


async def cancel_on_disconnect(
    request: Request, operation: Coroutine[Any, Any, T], poll_interval: float = DISCONNECT_POLL_INTERVAL
) -> T:
    """Run operation, cancelling it as soon as the client disconnects.

    Raises RequestCancelledError when the client went away first. If the handler
    itself is cancelled (server shutdown), the operation is cancelled with it.
    """
    task = asyncio.ensure_future(operation)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                raise RequestCancelledError
    finally:
        if not task.done():
            task.cancel()
