"""
Membership snapshot entries.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMBERSHIP_JOIN = "join"
MEMBERSHIP_BAN = "ban"
MEMBERSHIP_LEAVE = "leave"


@dataclass(frozen=True, slots=True)
class RoomMember:
    """One ``(user id, membership)`` pair of a room's membership snapshot."""

    user_id: str
    membership: str

    @property
    def is_banned(self) -> bool:
        return self.membership == MEMBERSHIP_BAN
