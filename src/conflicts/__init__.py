"""Version conflict model and snapshot comparison."""

from .compare import (
    ChangeCategory,
    ConflictComparison,
    ConflictDirection,
    classify,
    compare_conflicts,
    count_directions,
)
from .dependency_conflict import DependencyConflict
from .errors import ConflictDiffError, ExtractionError, InvariantViolation, MissingWinnerError
from .version_conflict import VersionConflict

__all__ = [
    "ChangeCategory",
    "ConflictComparison",
    "ConflictDiffError",
    "ConflictDirection",
    "DependencyConflict",
    "ExtractionError",
    "InvariantViolation",
    "MissingWinnerError",
    "VersionConflict",
    "classify",
    "compare_conflicts",
    "count_directions",
]
