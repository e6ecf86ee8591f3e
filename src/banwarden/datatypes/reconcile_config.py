"""
Immutable settings consumed by a reconciliation pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from banwarden.util.matrix_glob import MatrixGlob

DEFAULT_AUTOMATIC_REDACT_PATTERNS: Tuple[str, ...] = ("spam", "advertising")


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Configuration value passed explicitly into the engine.

    Attributes:
        noop: Compute and log decisions without issuing ban/unban calls.
        faster_membership_checks: Read only joined members instead of the full
            room state. Cheaper, but blind to banned, invited and departed users.
        automatic_redact_patterns: Globs matched case-insensitively against a
            ban reason; a match queues redaction of the user's messages.
    """

    noop: bool = False
    faster_membership_checks: bool = False
    automatic_redact_patterns: Tuple[str, ...] = DEFAULT_AUTOMATIC_REDACT_PATTERNS
    _redact_globs: Tuple[MatrixGlob, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        patterns = tuple(str(p) for p in self.automatic_redact_patterns)
        object.__setattr__(self, "automatic_redact_patterns", patterns)
        object.__setattr__(self, "_redact_globs", tuple(MatrixGlob(p.lower()) for p in patterns))

    @classmethod
    def build(
        cls,
        *,
        noop: bool = False,
        faster_membership_checks: bool = False,
        automatic_redact_patterns: Iterable[str] = DEFAULT_AUTOMATIC_REDACT_PATTERNS,
    ) -> "ReconcileConfig":
        return cls(
            noop=noop,
            faster_membership_checks=faster_membership_checks,
            automatic_redact_patterns=tuple(automatic_redact_patterns),
        )

    def should_redact_for(self, reason: str) -> bool:
        """Return True if ``reason`` matches any automatic-redaction pattern."""
        lowered = (reason or "").lower()
        return any(glob.test(lowered) for glob in self._redact_globs)
