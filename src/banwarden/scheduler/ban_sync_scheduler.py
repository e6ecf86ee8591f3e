"""Periodic ban-policy reconciliation.

Runs one reconciliation pass over the protected rooms on a fixed interval.
The ban lists and the room ids are obtained from caller-supplied providers on
every pass, so list updates and newly protected rooms are picked up without a
restart. Room errors are reported through the management log, throttled by an
``ErrorCache`` so a room that keeps failing the same way is not re-announced
on every pass.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence

from banwarden.banlist.ban_list import BanList
from banwarden.client.chat_client import ModerationLogger
from banwarden.datatypes.error_datatypes import ErrorKind, RoomUpdateError
from banwarden.moderation.ban_policy_engine import BanPolicyEngine
from banwarden.moderation.error_cache import ErrorCache
from banwarden.util.logger import get_logger

logger = get_logger("ban_sync_scheduler")

SYNC_TAG = "BanSync"

ListsProvider = Callable[[], Awaitable[Sequence[BanList]]]
RoomsProvider = Callable[[], Awaitable[Sequence[str]]]


class BanSyncScheduler:
    """
    Background driver for reconciliation passes.

    Args:
        engine: Engine performing each pass.
        get_lists: Async callable returning the ban lists, in priority order.
        get_room_ids: Async callable returning the rooms to reconcile.
        get_interval: Callable returning the interval in seconds (called at start).
        log: Operator-facing logger for room error reports.
        error_cache: Throttle for repeated room errors.
    """

    def __init__(
        self,
        engine: BanPolicyEngine,
        get_lists: ListsProvider,
        get_room_ids: RoomsProvider,
        get_interval: Callable[[], float],
        log: ModerationLogger,
        error_cache: ErrorCache | None = None,
    ) -> None:
        self._engine = engine
        self._get_lists = get_lists
        self._get_room_ids = get_room_ids
        self._get_interval = get_interval
        self._log = log
        self._error_cache = error_cache or ErrorCache()
        self._task: asyncio.Task | None = None

    async def sync_once(self) -> List[RoomUpdateError]:
        """Run a single pass and report its errors."""
        lists = await self._get_lists()
        room_ids = list(await self._get_room_ids())
        errors = await self._engine.apply_ban_policies(lists, room_ids)
        await self._report(room_ids, errors)
        return errors

    async def _report(self, room_ids: Sequence[str], errors: Sequence[RoomUpdateError]) -> None:
        failed_rooms = {error.room_id for error in errors}
        for room_id in room_ids:
            if room_id not in failed_rooms:
                self._error_cache.reset_room(room_id)

        for error in errors:
            if not self._error_cache.trigger_error(error.room_id, error.error_kind):
                continue
            level = logging.WARNING if error.error_kind is ErrorKind.PERMISSION else logging.ERROR
            await self._log.log(
                level,
                SYNC_TAG,
                f"Could not apply bans in {error.room_id}: {error.error_message}",
                error.room_id,
            )

    async def _run_loop(self, interval: float) -> None:
        """Infinite loop: reconcile, sleep, repeat."""
        logger.info("[BAN SYNC] Starting periodic reconciliation (interval=%.1fs)", interval)
        try:
            while True:
                try:
                    await self.sync_once()
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    logger.error("[BAN SYNC] Unexpected error during reconciliation: %s", exc)
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("[BAN SYNC] Periodic reconciliation cancelled")
            raise

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background task if not already running."""
        if self.running:
            logger.warning("[BAN SYNC] Reconciliation task already running")
            return
        interval = self._get_interval()
        self._task = asyncio.create_task(self._run_loop(interval), name="banwarden-ban-sync")

    async def shutdown(self) -> None:
        """Stop the background task."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("[BAN SYNC] Scheduler shutdown complete")
