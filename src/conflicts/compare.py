"""Compare the conflicts of two snapshots and classify the differences.

``compare_conflicts(base, current)`` sorts every artifact into one of three
buckets:

- resolved: conflicts present in the base snapshot only
- new: conflicts present in the current snapshot only
- changed: conflicts present in both whose counts differ

Artifacts whose conflicts are identical in both snapshots are left out.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List

from common.logging_utils import extra_context, is_debug_enabled

from .dependency_conflict import DependencyConflict
from .errors import InvariantViolation
from .version_conflict import VersionConflict

logger = logging.getLogger(__name__)


class ConflictDirection(Enum):
    """Whether the resolver moved an artifact up or down from the omitted version."""

    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
    EQUAL = "equal"


class ChangeCategory(Enum):
    """Bucket an artifact falls into when two snapshots are compared."""

    RESOLVED = "resolved"
    NEW = "new"
    CHANGED = "changed"


def classify(conflict: VersionConflict) -> ConflictDirection:
    """Classify a pair by comparing the losing version against the winning one.

    EQUAL should not occur for well-formed input; it is reported, not rejected.
    """
    result = conflict.losing_version.compare_to(conflict.winning_version)
    if result < 0:
        return ConflictDirection.UPGRADE
    if result > 0:
        return ConflictDirection.DOWNGRADE
    return ConflictDirection.EQUAL


def count_directions(conflicts: Iterable[DependencyConflict]) -> Dict[ConflictDirection, int]:
    """Number of version pairs per direction across ``conflicts``."""
    counter: Counter = Counter()
    for dependency_conflict in conflicts:
        for version_conflict in dependency_conflict:
            counter[classify(version_conflict)] += 1
    return {direction: counter.get(direction, 0) for direction in ConflictDirection}


@dataclass
class ConflictComparison:
    """Result of comparing a base snapshot against a current snapshot."""

    resolved: List[DependencyConflict] = field(default_factory=list)
    new: List[DependencyConflict] = field(default_factory=list)
    changed: List[DependencyConflict] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.resolved or self.new or self.changed)

    def by_category(self) -> Dict[ChangeCategory, List[DependencyConflict]]:
        return {
            ChangeCategory.RESOLVED: self.resolved,
            ChangeCategory.NEW: self.new,
            ChangeCategory.CHANGED: self.changed,
        }

    def has_regressions(self) -> bool:
        """True when the current snapshot introduced conflicts or increased a count."""
        if self.new:
            return True
        return any(vc.count > 0 for dc in self.changed for vc in dc)

    def summary(self) -> Dict[str, int]:
        return {
            ChangeCategory.RESOLVED.value: len(self.resolved),
            ChangeCategory.NEW.value: len(self.new),
            ChangeCategory.CHANGED.value: len(self.changed),
        }


def index_conflicts(conflicts: Iterable[DependencyConflict], label: str = "snapshot") -> Dict[str, DependencyConflict]:
    """Map conflicts by artifact key; duplicate keys within one snapshot are rejected."""
    indexed: Dict[str, DependencyConflict] = {}
    for conflict in conflicts:
        if conflict.artifact_key in indexed:
            raise InvariantViolation(
                f"Duplicate artifact key in {label} conflicts: {conflict.artifact_key}"
            )
        indexed[conflict.artifact_key] = conflict
    return indexed


def compare_conflicts(
    base: Iterable[DependencyConflict],
    current: Iterable[DependencyConflict],
) -> ConflictComparison:
    """Classify the differences between ``base`` and ``current`` conflicts.

    Neither input is modified; changed entries are fresh aggregates produced
    by :meth:`DependencyConflict.diff`.

    Args:
        base: Conflicts of the reference snapshot (for example the target branch).
        current: Conflicts of the snapshot under review.

    Returns:
        ConflictComparison with resolved, new and changed lists.

    Raises:
        InvariantViolation: If an artifact key appears twice within one input.
    """
    base_map = index_conflicts(base, "base")
    current_map = index_conflicts(current, "current")
    comparison = ConflictComparison()

    for key, base_conflict in base_map.items():
        current_conflict = current_map.get(key)
        if current_conflict is None:
            comparison.resolved.append(base_conflict)
            continue
        difference = current_conflict.diff(base_conflict)
        if not difference.is_empty():
            comparison.changed.append(difference)

    for key, current_conflict in current_map.items():
        if key not in base_map:
            comparison.new.append(current_conflict)

    if is_debug_enabled(logger):
        logger.debug(
            "Compared conflict snapshots",
            extra=extra_context(
                event="decision",
                component="compare",
                action="compare_conflicts",
                base_count=len(base_map),
                current_count=len(current_map),
                **comparison.summary(),
            ),
        )
    return comparison
