from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from ..errors import BatchTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _discard(task: asyncio.Future) -> None:
    # Retrieve the outcome so an abandoned failure is not reported as unhandled
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned task failed after its deadline", exc_info=task.exception())


async def race_deadline(awaitable: Awaitable[T], timeout_s: float | None) -> T:
    """
    Run ``awaitable`` against a timer and return its result if it wins.

    When the timer wins, BatchTimeout is raised and the work is abandoned:
    it is neither cancelled nor awaited. ``None`` or a non-positive timeout
    waits without a deadline.
    """
    task = asyncio.ensure_future(awaitable)
    if timeout_s is None or timeout_s <= 0:
        return await task

    done, _ = await asyncio.wait({task}, timeout=timeout_s)
    if task in done:
        return task.result()

    task.add_done_callback(_discard)
    raise BatchTimeout(f"deadline of {timeout_s:.3f}s elapsed")
