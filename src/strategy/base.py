"""Contract shared by the conflict extraction strategies."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from conflicts.dependency_conflict import DependencyConflict


@runtime_checkable
class ConflictDetectionStrategy(Protocol):
    """Turns one snapshot of raw dependency data into per-artifact conflicts."""

    def collect(self, snapshot: str) -> List[DependencyConflict]:
        """Return one entry per artifact that currently has a version conflict.

        Args:
            snapshot: Identifier of the snapshot to read (a branch name, a
                working-copy directory or a captured output file).
        """
        ...  # pylint: disable=unnecessary-ellipsis
