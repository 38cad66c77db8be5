"""Maven-style version ordering.

A version string is split into a tree of items: ``.`` separates items at the
same level, ``-`` and digit/letter transitions open a nested list. Numeric
items compare as integers, qualifier items compare through a
:class:`QualifierTable`, and trailing "null" items (``0``, release
qualifiers, empty lists) are dropped so that ``1``, ``1.0`` and ``1.0.0-ga``
are the same version.

This ordering is only used to describe a conflict (upgrade or downgrade); it
never decides which version wins.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from constants import Constants


@dataclass(frozen=True)
class QualifierTable:
    """Precedence and spelling rules for non-numeric version qualifiers.

    ``order`` lists known qualifiers from lowest to highest; ``release`` must
    be one of them and marks an unqualified release. Unknown qualifiers rank
    above every known one and compare lexically among themselves.
    """

    order: Tuple[str, ...]
    aliases: Mapping[str, str] = field(default_factory=dict)
    shorthands: Mapping[str, str] = field(default_factory=dict)
    release: str = ""

    def __post_init__(self) -> None:
        if self.release not in self.order:
            raise ValueError(f"Release qualifier {self.release!r} missing from qualifier order")

    @classmethod
    def from_config(
        cls,
        order: Optional[Iterable[str]] = None,
        aliases: Optional[Mapping[str, str]] = None,
        shorthands: Optional[Mapping[str, str]] = None,
    ) -> "QualifierTable":
        """Build a table, falling back to the Maven defaults for omitted parts."""
        return cls(
            order=tuple(str(q).lower() for q in (order if order is not None else Constants.QUALIFIER_ORDER)),
            aliases={
                str(k).lower(): str(v).lower()
                for k, v in (aliases if aliases is not None else Constants.QUALIFIER_ALIASES).items()
            },
            shorthands={
                str(k).lower(): str(v).lower()
                for k, v in (shorthands if shorthands is not None else Constants.QUALIFIER_SHORTHANDS).items()
            },
        )

    def normalize(self, qualifier: str, followed_by_digit: bool) -> str:
        """Expand shorthands (``a1`` -> ``alpha``) and resolve aliases."""
        if followed_by_digit and len(qualifier) == 1:
            qualifier = self.shorthands.get(qualifier, qualifier)
        return self.aliases.get(qualifier, qualifier)

    def rank(self, qualifier: str) -> Tuple[int, str]:
        try:
            return self.order.index(qualifier), ""
        except ValueError:
            return len(self.order), qualifier

    @property
    def release_rank(self) -> Tuple[int, str]:
        return self.rank(self.release)


DEFAULT_QUALIFIERS = QualifierTable.from_config()


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


class _IntItem:
    def __init__(self, text: str) -> None:
        self.value = int(text)

    def is_null(self) -> bool:
        return self.value == 0

    def __str__(self) -> str:
        return str(self.value)


class _StringItem:
    def __init__(self, text: str, followed_by_digit: bool, table: QualifierTable) -> None:
        self.value = table.normalize(text, followed_by_digit)
        self.rank = table.rank(self.value)
        self.table = table

    def is_null(self) -> bool:
        return self.rank == self.table.release_rank

    def __str__(self) -> str:
        return self.value


class _ListItem:
    def __init__(self) -> None:
        self.items: List[_Item] = []

    def is_null(self) -> bool:
        return not self.items

    def normalize(self) -> None:
        for index in range(len(self.items) - 1, -1, -1):
            item = self.items[index]
            if item.is_null():
                del self.items[index]
            elif not isinstance(item, _ListItem):
                break

    def __str__(self) -> str:
        parts: List[str] = []
        for item in self.items:
            if parts:
                parts.append("-" if isinstance(item, _ListItem) else ".")
            parts.append(str(item))
        return "".join(parts)


_Item = Union[_IntItem, _StringItem, _ListItem]


def _compare(left: _Item, right: Optional[_Item]) -> int:
    """Three-way comparison of two items; ``right`` None stands for padding."""
    if isinstance(left, _IntItem):
        if right is None:
            return 0 if left.value == 0 else 1
        if isinstance(right, _IntItem):
            return _cmp(left.value, right.value)
        # 1.1 > 1-sp and 1.1 > 1-1
        return 1

    if isinstance(left, _StringItem):
        if right is None:
            # 1-rc < 1, 1-sp > 1
            return _cmp(left.rank, left.table.release_rank)
        if isinstance(right, _StringItem):
            return _cmp(left.rank, right.rank)
        return -1

    if right is None:
        if not left.items:
            return 0
        return _compare(left.items[0], None)
    if isinstance(right, _IntItem):
        return -1
    if isinstance(right, _StringItem):
        return 1
    for mine, theirs in zip_longest(left.items, right.items):
        if mine is None:
            result = -_compare(theirs, None)
        else:
            result = _compare(mine, theirs)
        if result:
            return result
    return 0


def _parse_item(is_digit: bool, text: str, table: QualifierTable) -> _Item:
    if is_digit:
        return _IntItem(text)
    return _StringItem(text, False, table)


def _parse(version: str, table: QualifierTable) -> _ListItem:
    version = version.lower()
    root = _ListItem()
    current = root
    stack = [root]
    is_digit = False
    start = 0

    def _open_list() -> _ListItem:
        nested = _ListItem()
        current.items.append(nested)
        stack.append(nested)
        return nested

    for index, char in enumerate(version):
        if char == ".":
            if index == start:
                current.items.append(_IntItem("0"))
            else:
                current.items.append(_parse_item(is_digit, version[start:index], table))
            start = index + 1
        elif char == "-":
            if index == start:
                current.items.append(_IntItem("0"))
            else:
                current.items.append(_parse_item(is_digit, version[start:index], table))
            start = index + 1
            current = _open_list()
        elif "0" <= char <= "9":
            if not is_digit and index > start:
                current.items.append(_StringItem(version[start:index], True, table))
                start = index
                current = _open_list()
            is_digit = True
        else:
            if is_digit and index > start:
                current.items.append(_parse_item(True, version[start:index], table))
                start = index
                current = _open_list()
            is_digit = False

    if len(version) > start:
        current.items.append(_parse_item(is_digit, version[start:], table))

    while stack:
        stack.pop().normalize()
    return root


@functools.total_ordering
class ComparableVersion:
    """A version string with Maven ordering semantics.

    Equality and hashing use the canonical form, so ``ComparableVersion("1.0")``
    equals ``ComparableVersion("1.0.0")``; ``str()`` keeps the input text.
    """

    def __init__(self, version: str, qualifiers: QualifierTable = DEFAULT_QUALIFIERS) -> None:
        if not isinstance(version, str):
            raise TypeError(f"version must be a string, got {type(version).__name__}")
        self._value = version
        self._qualifiers = qualifiers
        self._items = _parse(version, qualifiers)
        self._canonical = str(self._items)

    @property
    def value(self) -> str:
        return self._value

    @property
    def canonical(self) -> str:
        return self._canonical

    def compare_to(self, other: "ComparableVersion") -> int:
        """Return -1, 0 or 1 as this version orders below, equal to or above ``other``."""
        return _compare(self._items, other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return self._canonical == other._canonical

    def __lt__(self, other: "ComparableVersion") -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash(self._canonical)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ComparableVersion({self._value!r})"


VersionLike = Union[str, ComparableVersion]


def as_version(value: VersionLike, qualifiers: Optional[QualifierTable] = None) -> ComparableVersion:
    """Coerce a version string to :class:`ComparableVersion`; versions pass through."""
    if isinstance(value, ComparableVersion):
        return value
    return ComparableVersion(value, qualifiers or DEFAULT_QUALIFIERS)


def qualifier_table_from_dict(data: Optional[Dict]) -> QualifierTable:
    """Build a table from a configuration mapping with optional order/aliases/shorthands."""
    if not data:
        return DEFAULT_QUALIFIERS
    return QualifierTable.from_config(
        order=data.get("order"),
        aliases=data.get("aliases"),
        shorthands=data.get("shorthands"),
    )
