"""
Per-room error report types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """How a failed room update should be treated by whoever reads the report.

    PERMISSION means the warden lacks the power level to ban/unban in the room
    and is usually noted quietly. FATAL is everything else and should alert.
    """

    PERMISSION = "permission"
    FATAL = "fatal"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RoomUpdateError:
    """A room that could not be brought into compliance during a pass.

    Attributes:
        room_id: The room that failed.
        error_message: Human-readable message extracted from the failure.
        error_kind: Classification of the failure.
    """

    room_id: str
    error_message: str
    error_kind: ErrorKind
