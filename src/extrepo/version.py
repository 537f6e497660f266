"""Release versions as published by extension repositories.

Repositories serve Maven style versions (``1.0-SNAPSHOT``,
``9.11-milestone-1``, ``13.10.2-rc-1``), so any non-blank string is a
version. Ordering splits the string into numeric and alphabetic items and
ranks well-known qualifiers before falling back to plain text comparison.
"""

from __future__ import annotations

import re
from typing import Callable, Protocol

from extrepo.exceptions import InvalidVersionError


class Version(Protocol):
    """Opaque, externally ordered release version."""

    def __lt__(self, other: object) -> bool: ...

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...


VersionParser = Callable[[str], Version]

_ITEM = re.compile(r"\d+|[^\W\d_]+")

_QUALIFIER_ALIASES = {
    "a": "alpha",
    "b": "beta",
    "m": "milestone",
    "cr": "rc",
    "ga": "",
    "final": "",
    "release": "",
}
_QUALIFIER_RANKS = {
    "alpha": 0,
    "beta": 1,
    "milestone": 2,
    "rc": 3,
    "snapshot": 4,
    "": 5,
    "sp": 6,
}
_UNKNOWN_QUALIFIER_RANK = 7

# items compare as (kind, rank or number, text); numbers sort after qualifiers
_RELEASE = (0, _QUALIFIER_RANKS[""], "")
_ZERO = (1, 0, "")

_Item = tuple[int, int, str]


def _to_item(token: str) -> _Item:
    if token.isdecimal():
        return (1, int(token), "")
    qualifier = _QUALIFIER_ALIASES.get(token, token)
    rank = _QUALIFIER_RANKS.get(qualifier)
    if rank is None:
        return (0, _UNKNOWN_QUALIFIER_RANK, qualifier)
    return (0, rank, "")


def _to_items(value: str) -> tuple[_Item, ...]:
    items: list[_Item] = []
    for token in _ITEM.findall(value.lower()):
        item = _to_item(token)
        if item[0] == 0:
            # "1.0-rc-1" is "1-rc-1"
            while items and items[-1] == _ZERO:
                items.pop()
        items.append(item)
    # "1.0", "1.0.0" and "1.0-final" are all "1"
    while items and items[-1] in (_ZERO, _RELEASE):
        items.pop()
    return tuple(items)


class DefaultVersion(object):
    """Version accepting any non-blank string, rendered as given."""

    __slots__ = ("value", "_items")

    def __init__(self, value: str) -> None:
        if not value or not value.strip():
            raise InvalidVersionError(f"Invalid version: {value!r}")
        self.value = value
        self._items = _to_items(value)

    def _compare(self, other: DefaultVersion) -> int:
        size = max(len(self._items), len(other._items))
        for index in range(size):
            left = self._items[index] if index < len(self._items) else _RELEASE
            right = other._items[index] if index < len(other._items) else _RELEASE
            if left != right:
                return -1 if left < right else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefaultVersion):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DefaultVersion):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DefaultVersion):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DefaultVersion):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DefaultVersion):
            return NotImplemented
        return self._compare(other) >= 0

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DefaultVersion({self.value!r})"


def parse_version(value: str) -> Version:
    """Parse *value*, only a blank string is rejected."""
    return DefaultVersion(value)
