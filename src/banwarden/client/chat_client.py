"""
Narrow interfaces the reconciliation core depends on.

The engine never talks to the homeserver directly; it goes through a
``ChatClient`` for membership reads and ban/unban calls, a ``RedactionSink``
to trigger message clean-up, and a ``ModerationLogger`` for operator-facing
messages. Tests substitute mocks for all three.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class ChatClient(Protocol):
    async def get_joined_room_members(self, room_id: str) -> List[str]:
        """Return the user ids currently joined to ``room_id``."""
        ...

    async def get_room_state(self, room_id: str) -> List[Dict[str, Any]]:
        """Return the raw state events of ``room_id``."""
        ...

    async def ban_user(self, user_id: str, room_id: str, reason: str) -> None:
        ...

    async def unban_user(self, user_id: str, room_id: str) -> None:
        ...

    async def send_notice(self, room_id: str, text: str) -> None:
        ...


@runtime_checkable
class RedactionSink(Protocol):
    def enqueue_redaction(self, user_id: str, room_id: str) -> None:
        """Queue redaction of ``user_id``'s messages in ``room_id``. Must not raise."""
        ...


@runtime_checkable
class ModerationLogger(Protocol):
    async def log(self, level: int, tag: str, message: str, room_id: str | None = None) -> None:
        """Report ``message`` to operators. Must not raise."""
        ...
