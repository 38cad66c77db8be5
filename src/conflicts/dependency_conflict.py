"""Per-artifact collection of version conflicts with signed-count merge and diff."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import InvariantViolation
from .version_conflict import VersionConflict


class DependencyConflict:
    """All version conflicts observed for one artifact (``groupId:artifactId``).

    Records are keyed by :meth:`VersionConflict.identity_key`. A stored record
    never has a zero count: any merge that cancels a record removes it.

    Args:
        artifact_key: Version-independent artifact identity.
        conflicts: Optional initial records, merged with :meth:`add_conflict`.
    """

    def __init__(self, artifact_key: str, conflicts: Optional[Iterable[VersionConflict]] = None) -> None:
        if artifact_key is None:
            raise InvariantViolation("artifact_key cannot be None")
        self._artifact_key = artifact_key
        self._conflicts: Dict[str, VersionConflict] = {}
        for conflict in conflicts or ():
            self.add_conflict(conflict)

    @property
    def artifact_key(self) -> str:
        return self._artifact_key

    @property
    def conflicts(self) -> Mapping[str, VersionConflict]:
        """Read-only view of the stored records by identity key."""
        return MappingProxyType(self._conflicts)

    def records(self) -> List[VersionConflict]:
        """Stored records in insertion order."""
        return list(self._conflicts.values())

    def _merge(self, conflict: VersionConflict, sign: int) -> None:
        # sign is +1 for add, -1 for subtract
        if conflict is None:
            raise InvariantViolation("VersionConflict cannot be None")
        if conflict.count == 0:
            return
        key = conflict.identity_key()
        existing = self._conflicts.get(key)
        if existing is None:
            self._conflicts[key] = conflict if sign > 0 else conflict.negate()
            return
        merged = existing.add(conflict) if sign > 0 else existing.subtract(conflict)
        if merged.count == 0:
            del self._conflicts[key]
        else:
            self._conflicts[key] = merged

    def add_conflict(self, conflict: VersionConflict) -> None:
        """Merge ``conflict`` into this aggregate, summing counts for the same pair.

        A zero-count conflict is ignored. A conflict without a matching record
        is stored as is, including a negative count.
        """
        self._merge(conflict, 1)

    def subtract_conflict(self, conflict: VersionConflict) -> None:
        """Subtract ``conflict``; an unmatched conflict is stored with its count negated."""
        self._merge(conflict, -1)

    def _require_same_artifact(self, other: "DependencyConflict") -> None:
        if other is None:
            raise InvariantViolation("DependencyConflict cannot be None")
        if self._artifact_key != other.artifact_key:
            raise InvariantViolation(
                f"Artifact keys must be the same: {self._artifact_key} vs {other.artifact_key}"
            )

    def add(self, other: "DependencyConflict") -> None:
        """Merge every record of ``other`` into this aggregate in place."""
        self._require_same_artifact(other)
        for conflict in other.records():
            self.add_conflict(conflict)

    def union(self, other: "DependencyConflict") -> None:
        """Same as :meth:`add`."""
        self.add(other)

    def diff(self, base: "DependencyConflict") -> "DependencyConflict":
        """Return a new aggregate holding ``self - base`` per version pair.

        Pairs only in ``self`` keep their count, pairs only in ``base`` appear
        with a negated count and pairs with equal counts disappear.
        """
        self._require_same_artifact(base)
        result = DependencyConflict(self._artifact_key)
        for conflict in self.records():
            result.add_conflict(conflict)
        for conflict in base.records():
            result.subtract_conflict(conflict)
        return result

    def is_empty(self) -> bool:
        return not self._conflicts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artifact": self._artifact_key,
            "conflicts": [conflict.to_dict() for conflict in self._conflicts.values()],
        }

    def __iter__(self) -> Iterator[VersionConflict]:
        return iter(list(self._conflicts.values()))

    def __len__(self) -> int:
        return len(self._conflicts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyConflict):
            return NotImplemented
        if self._artifact_key != other.artifact_key:
            return False
        return {k: v.count for k, v in self._conflicts.items()} == {
            k: v.count for k, v in other.conflicts.items()
        }

    def __hash__(self) -> int:
        return hash(self._artifact_key)

    def __repr__(self) -> str:
        return f"DependencyConflict(artifact_key={self._artifact_key!r}, conflicts={self.records()!r})"
