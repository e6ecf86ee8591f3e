"""
Action types and data structures for ban-policy decisions.

This module defines the ActionType enum and ActionDecision dataclass produced by
the reconciliation engine and consumed by the action executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Enumeration of actions the reconciliation engine can decide on."""

    BAN = "ban"
    UNBAN = "unban"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ActionDecision:
    """Outcome of evaluating the ban lists for one member of one room.

    Attributes:
        user_id: Matrix user id the decision is about.
        room_id: Room the decision applies to.
        action: Action to take; ``ActionType.NULL`` when no rule applied.
        reason: Reason taken from the deciding rule (empty for NULL decisions).
    """

    user_id: str
    room_id: str
    action: ActionType
    reason: str = ""

    @classmethod
    def none(cls, user_id: str, room_id: str) -> "ActionDecision":
        return cls(user_id=user_id, room_id=room_id, action=ActionType.NULL)

    @property
    def is_actionable(self) -> bool:
        return self.action is not ActionType.NULL
