"""Exceptions raised by the conflict model, the extraction strategies and their sources."""

from __future__ import annotations

from typing import Optional


class ConflictDiffError(Exception):
    """Base class for all conflictdiff failures."""


class InvariantViolation(ConflictDiffError, ValueError):
    """Raised when a model operation is called with arguments that break its contract.

    Examples are combining aggregates for different artifacts, merging version
    pairs with different versions, or building a pair without a version.
    """


class MissingWinnerError(ConflictDiffError, LookupError):
    """An artifact has several versions in the graph but the resolver chose none of them.

    This means the winner set and the graph disagree; retrying with the same
    inputs cannot succeed.
    """

    def __init__(self, artifact_key: str, versions: Optional[list] = None) -> None:
        self.artifact_key = artifact_key
        self.versions = list(versions or [])
        message = (
            f"No winning version found for artifact: {artifact_key}. "
            "This indicates an inconsistency in the dependency resolution process."
        )
        super().__init__(message)


class ExtractionError(ConflictDiffError):
    """Raw snapshot data could not be produced or read."""

    def __init__(self, message: str, snapshot: Optional[str] = None) -> None:
        self.snapshot = snapshot
        super().__init__(message)
