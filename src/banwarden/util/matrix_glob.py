"""
Glob matching for Matrix identifiers.

Ban-list entities and automatic-redaction reasons are written as simple
globs: ``*`` matches any run of characters (including none), ``?`` matches
exactly one character and everything else is literal. A glob matches only
when it covers the whole input.
"""

from __future__ import annotations

import re


class MatrixGlob:
    """Compiled glob pattern.

    Example:
        >>> MatrixGlob("@spam*:example.org").test("@spammer:example.org")
        True
        >>> MatrixGlob("@spam*:example.org").test("@spammer:example.org.evil")
        False
    """

    __slots__ = ("_pattern", "_regex")

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        escaped = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
        self._regex = re.compile(escaped, re.DOTALL)

    @property
    def pattern(self) -> str:
        return self._pattern

    def test(self, value: str) -> bool:
        """Return True if ``value`` matches the glob in full."""
        return self._regex.fullmatch(value) is not None

    def __repr__(self) -> str:
        return f"MatrixGlob({self._pattern!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MatrixGlob):
            return self._pattern == other._pattern
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._pattern)
