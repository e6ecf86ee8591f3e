"""
Operator-facing log channel.

Every message goes to the package logger. When a management room is
configured, messages at or above ``notice_level`` are also posted there as
notices so moderators see what the warden is doing. Posting is best effort:
a failed notice is logged locally and otherwise ignored.
"""

from __future__ import annotations

import asyncio
import logging

from banwarden.client.chat_client import ChatClient
from banwarden.util.logger import get_logger

logger = get_logger("management_log")


class ManagementLog:
    """
    ``ModerationLogger`` implementation.

    Args:
        client: Client used to post notices; None disables mirroring.
        management_room_id: Room receiving notices; None disables mirroring.
        notice_level: Minimum level mirrored to the management room.
    """

    def __init__(
        self,
        client: ChatClient | None = None,
        management_room_id: str | None = None,
        notice_level: int = logging.INFO,
    ) -> None:
        self._client = client
        self._management_room_id = management_room_id
        self._notice_level = notice_level

    @property
    def mirrors_to_room(self) -> bool:
        return self._client is not None and bool(self._management_room_id)

    async def log(self, level: int, tag: str, message: str, room_id: str | None = None) -> None:
        if room_id:
            logger.log(level, "[%s] %s (room=%s)", tag, message, room_id)
        else:
            logger.log(level, "[%s] %s", tag, message)

        if level < self._notice_level or not self.mirrors_to_room:
            return

        try:
            await self._client.send_notice(self._management_room_id, f"{logging.getLevelName(level)} [{tag}] {message}")
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("[MANAGEMENT LOG] Failed to post notice to %s: %s", self._management_room_id, exc)
