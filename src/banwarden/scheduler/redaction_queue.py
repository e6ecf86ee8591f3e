"""
Fire-and-forget queue of "redact this user's messages in this room" jobs.

The reconciliation pass only triggers redactions; the clean-up itself is done
by an injected handler on a background worker, one job at a time. Enqueueing
never blocks and never raises: duplicates of a pending job are coalesced and
a full queue drops the job with a warning.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Tuple

from banwarden.util.logger import get_logger

logger = get_logger("redaction_queue")

RedactionHandler = Callable[[str, str], Awaitable[None]]

DEFAULT_MAX_SIZE = 1000


class RedactionQueue:
    """
    Bounded queue drained by a single background worker.

    Attributes:
        queue (asyncio.Queue): Pending ``(user_id, room_id)`` jobs.
        pending_keys (set): Jobs queued but not yet finished, for coalescing.
        runner_task (asyncio.Task | None): Worker draining the queue.
    """

    def __init__(self, handler: RedactionHandler, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self._handler = handler
        self.queue: asyncio.Queue[Tuple[str, str]] = asyncio.Queue(maxsize=max_size)
        self.pending_keys: set[Tuple[str, str]] = set()
        self.runner_task: asyncio.Task[None] | None = None

    def ensure_runner(self) -> None:
        """Create the worker task if it is not already running."""
        loop = asyncio.get_running_loop()
        if self.runner_task is None or self.runner_task.done():
            self.runner_task = loop.create_task(self.run(), name="banwarden-redaction-queue")

    def enqueue_redaction(self, user_id: str, room_id: str) -> None:
        key = (user_id, room_id)
        if key in self.pending_keys:
            logger.debug("[REDACTION QUEUE] Redaction of %s in %s already pending", user_id, room_id)
            return

        try:
            self.queue.put_nowait(key)
        except asyncio.QueueFull:
            logger.warning("[REDACTION QUEUE] Queue full, dropping redaction of %s in %s", user_id, room_id)
            return

        self.pending_keys.add(key)
        logger.debug("[REDACTION QUEUE] Queued redaction of %s in %s", user_id, room_id)

        try:
            self.ensure_runner()
        except RuntimeError as exc:
            # No running loop; the job waits for start()
            logger.warning("[REDACTION QUEUE] Could not start worker: %s", exc)

    def start(self) -> None:
        self.ensure_runner()

    async def run(self) -> None:
        """Worker loop: redact queued jobs one at a time until cancelled."""
        while True:
            user_id, room_id = await self.queue.get()
            try:
                await self._handler(user_id, room_id)
                logger.info("[REDACTION QUEUE] Redacted messages of %s in %s", user_id, room_id)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("[REDACTION QUEUE] Failed to redact messages of %s in %s: %s", user_id, room_id, exc)
            finally:
                self.pending_keys.discard((user_id, room_id))
                self.queue.task_done()

    async def drain(self) -> None:
        """Wait until every queued job has been handled."""
        if not self.queue.empty():
            self.ensure_runner()
        await self.queue.join()

    async def shutdown(self) -> None:
        """Cancel the worker and drop unprocessed jobs. Safe to call repeatedly."""
        if self.runner_task:
            self.runner_task.cancel()
            try:
                await self.runner_task
            except asyncio.CancelledError:
                pass
            finally:
                self.runner_task = None

        while not self.queue.empty():
            self.queue.get_nowait()
            self.queue.task_done()
        self.pending_keys.clear()
