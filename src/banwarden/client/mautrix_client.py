"""
``ChatClient`` implementation backed by mautrix.

Wraps :class:`mautrix.client.ClientAPI`. Room state is read through the raw
``/rooms/{roomId}/state`` endpoint so membership events come back exactly as
the homeserver sent them, including events with missing content.
"""

from __future__ import annotations

from typing import Any, Dict, List

from mautrix.api import Method, Path
from mautrix.client import ClientAPI
from mautrix.types import RoomID, UserID

from banwarden.util.logger import get_logger

logger = get_logger("mautrix_client")


class MautrixChatClient:
    """
    Chat-service client for Matrix homeservers.

    Args:
        api: An authenticated mautrix client.
    """

    def __init__(self, api: ClientAPI) -> None:
        self._api = api

    @classmethod
    def connect(cls, homeserver_url: str, access_token: str) -> "MautrixChatClient":
        """Build a client for ``homeserver_url`` authenticated with ``access_token``."""
        logger.info("[MATRIX CLIENT] Connecting to %s", homeserver_url)
        return cls(ClientAPI(base_url=homeserver_url, token=access_token))

    @property
    def api(self) -> ClientAPI:
        return self._api

    async def get_joined_room_members(self, room_id: str) -> List[str]:
        members = await self._api.get_joined_members(RoomID(room_id))
        return [str(user_id) for user_id in members]

    async def get_room_state(self, room_id: str) -> List[Dict[str, Any]]:
        events = await self._api.api.request(Method.GET, Path.v3.rooms[room_id].state)
        return list(events or [])

    async def ban_user(self, user_id: str, room_id: str, reason: str) -> None:
        await self._api.ban_user(RoomID(room_id), UserID(user_id), reason=reason)

    async def unban_user(self, user_id: str, room_id: str) -> None:
        await self._api.unban_user(RoomID(room_id), UserID(user_id))

    async def send_notice(self, room_id: str, text: str) -> None:
        await self._api.send_notice(RoomID(room_id), text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        session = getattr(self._api.api, "session", None)
        if session is not None and not session.closed:
            await session.close()
