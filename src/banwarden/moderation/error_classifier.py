"""
Turning per-room failures into report entries.

Classification is a substring heuristic on the homeserver's error text: the
transport does not hand us a typed "forbidden to ban" error, so any message
containing :data:`PERMISSION_DENIED_MARKER` is treated as a missing power
level and everything else as fatal.
"""

from __future__ import annotations

from typing import List

from banwarden.datatypes.error_datatypes import ErrorKind, RoomUpdateError

PERMISSION_DENIED_MARKER = "You don't have permission to ban"
NO_MESSAGE = "<no message>"


def describe_error(exc: BaseException) -> str:
    """
    Extract a human-readable message from ``exc``.

    Looks at a ``message`` attribute first (mautrix request errors carry one),
    then the exception text, then a nested ``body["error"]`` as returned by
    raw HTTP errors.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message

    text = str(exc)
    if text:
        return text

    body = getattr(exc, "body", None)
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])

    return NO_MESSAGE


def classify_error(message: str | None) -> ErrorKind:
    if message and PERMISSION_DENIED_MARKER in message:
        return ErrorKind.PERMISSION
    return ErrorKind.FATAL


class ErrorCollector:
    """Accumulates at most one ``RoomUpdateError`` per room during a pass."""

    def __init__(self) -> None:
        self._errors: List[RoomUpdateError] = []
        self._rooms: set[str] = set()

    def record(self, room_id: str, exc: BaseException) -> RoomUpdateError | None:
        """Record ``exc`` as the failure of ``room_id``.

        Returns the new entry, or None when the room already has one.
        """
        if room_id in self._rooms:
            return None
        message = describe_error(exc)
        error = RoomUpdateError(room_id=room_id, error_message=message, error_kind=classify_error(message))
        self._rooms.add(room_id)
        self._errors.append(error)
        return error

    @property
    def errors(self) -> List[RoomUpdateError]:
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)
