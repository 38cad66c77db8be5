"""A single losing -> winning version pair with a signed occurrence count."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from versioning.comparable import ComparableVersion, as_version

from .errors import InvariantViolation


@dataclass(frozen=True)
class VersionConflict:
    """One version conflict: ``losing_version`` was omitted in favour of ``winning_version``.

    Identity and equality only consider the two versions; ``count`` is the
    number of occurrences and may be negative when the instance describes a
    difference between two snapshots.

    Args:
        losing_version: Version (or version string) requested somewhere in the graph but not selected.
        winning_version: Version the resolver selected for the artifact.
        count: Signed number of occurrences.
    """

    losing_version: ComparableVersion
    winning_version: ComparableVersion
    count: int = field(default=1, compare=False)

    def __post_init__(self) -> None:
        if self.losing_version is None:
            raise InvariantViolation("losing_version cannot be None")
        if self.winning_version is None:
            raise InvariantViolation("winning_version cannot be None")
        object.__setattr__(self, "losing_version", as_version(self.losing_version))
        object.__setattr__(self, "winning_version", as_version(self.winning_version))
        object.__setattr__(self, "count", int(self.count))

    def identity_key(self) -> str:
        """Stable map key derived from the two versions (count excluded)."""
        return f"{self.losing_version.canonical}->{self.winning_version.canonical}"

    def _require_same_pair(self, other: "VersionConflict") -> None:
        if other is None:
            raise InvariantViolation("VersionConflict cannot be None")
        if self.losing_version != other.losing_version:
            raise InvariantViolation(
                f"Losing versions must be the same: {self.losing_version} vs {other.losing_version}"
            )
        if self.winning_version != other.winning_version:
            raise InvariantViolation(
                f"Winning versions must be the same: {self.winning_version} vs {other.winning_version}"
            )

    def add(self, other: "VersionConflict") -> "VersionConflict":
        """Return a new pair whose count is the sum of both counts."""
        self._require_same_pair(other)
        return VersionConflict(self.losing_version, self.winning_version, self.count + other.count)

    def subtract(self, other: "VersionConflict") -> "VersionConflict":
        """Return a new pair whose count is ``self.count - other.count``."""
        self._require_same_pair(other)
        return VersionConflict(self.losing_version, self.winning_version, self.count - other.count)

    def negate(self) -> "VersionConflict":
        return VersionConflict(self.losing_version, self.winning_version, -self.count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "losing_version": str(self.losing_version),
            "winning_version": str(self.winning_version),
            "count": self.count,
        }

    def __str__(self) -> str:
        return f"{self.losing_version} -> {self.winning_version} (x{self.count})"
