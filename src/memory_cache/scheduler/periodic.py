from __future__ import annotations

import logging
import typing as t

import anyio
from anyio.abc import TaskStatus

if t.TYPE_CHECKING:
    from ..cache.engine import MemoryCache

_logger = logging.getLogger(__name__)


async def sweep_periodically(
    cache: "MemoryCache",
    interval_ms: t.Optional[float] = None,
    *,
    task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
) -> None:
    """Sweep `cache` every interval until the surrounding task group is cancelled.

    Intended for event-loop hosts that construct the cache with
    `sweep_enabled=False` and own the sweep inside a task group::

        async with anyio.create_task_group() as tg:
            await tg.start(sweep_periodically, cache)
    """
    delay_ms = interval_ms if interval_ms is not None else cache.config.expiry_clean_delay_ms
    if delay_ms <= 0:
        raise ValueError("interval_ms must be positive")
    task_status.started()
    while True:
        await anyio.sleep(delay_ms / 1000.0)
        removed = cache.sweep()
        _logger.debug("Periodic sweep removed %d expired entries", removed)
