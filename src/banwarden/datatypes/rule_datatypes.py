"""
Rule types for ban lists.

A rule pairs a user-id glob with what should happen to matching users:
ban them, or explicitly exempt (unban) them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from banwarden.util.matrix_glob import MatrixGlob


class RuleKind(Enum):
    """Enumeration of rule recommendations understood by the warden."""

    BAN = "ban"
    UNBAN = "unban"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Rule:
    """A single user-matching rule.

    Attributes:
        kind: Whether matching users should be banned or unbanned.
        entity: Glob over the full user id, e.g. ``@*:spam.example``.
        reason: Human-readable reason; used for logging and as the ban reason.
    """

    kind: RuleKind
    entity: str
    reason: str = ""
    _glob: MatrixGlob = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "reason", self.reason or "")
        object.__setattr__(self, "_glob", MatrixGlob(self.entity))

    @classmethod
    def ban(cls, entity: str, reason: str = "") -> "Rule":
        return cls(RuleKind.BAN, entity, reason)

    @classmethod
    def unban(cls, entity: str, reason: str = "") -> "Rule":
        return cls(RuleKind.UNBAN, entity, reason)

    def matches(self, user_id: str) -> bool:
        """Return True if the entity glob covers ``user_id``, whatever the kind."""
        return self._glob.test(user_id)

    def is_banned_match(self, user_id: str) -> bool:
        return self.kind is RuleKind.BAN and self.matches(user_id)

    def is_unbanned_match(self, user_id: str) -> bool:
        return self.kind is RuleKind.UNBAN and self.matches(user_id)
