"""
Ordered collections of user rules.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from banwarden.datatypes.rule_datatypes import Rule


class BanList:
    """
    An ordered, read-only collection of user rules.

    Insertion order is evaluation priority: the reconciliation engine walks
    ``user_rules`` front to back and stops at the first applicable rule.

    Attributes:
        list_id: Identifier of the list (typically the policy room id).
    """

    __slots__ = ("list_id", "_rules")

    def __init__(self, list_id: str, rules: Iterable[Rule] = ()) -> None:
        self.list_id = list_id
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def user_rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"BanList({self.list_id!r}, rules={len(self._rules)})"
