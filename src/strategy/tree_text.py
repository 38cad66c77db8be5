"""Text-based conflict extraction from ``mvn dependency:tree -Dverbose`` output.

Verbose tree output marks every losing node explicitly, for example::

    [INFO] |  \\- (org.springframework:spring-jcl:jar:5.3.21:compile - omitted for conflict with 5.3.20)

so both versions can be read from the line itself without a winner lookup.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from conflicts.dependency_conflict import DependencyConflict
from conflicts.version_conflict import VersionConflict
from versioning.comparable import ComparableVersion, QualifierTable, DEFAULT_QUALIFIERS

logger = logging.getLogger(__name__)

LineSource = Callable[[str], Iterable[str]]

CONFLICT_PATTERN = re.compile(
    r"\((?P<group>[^:()\s]+):(?P<artifact>[^:()\s]+):(?P<type>[^:()\s]+)"
    r"(?::(?P<classifier>[^:()\s]+))?"
    r":(?P<version>[^:()\s]+):(?P<scope>[^:()\s]+)\s*"
    r"-\s+(?:[^()]*?;\s*)?omitted for conflict with\s+(?P<winner>[^()\s]+)\)"
)


class ConflictLine(NamedTuple):
    """Fields of one ``omitted for conflict`` annotation."""

    group_id: str
    artifact_id: str
    packaging: str
    classifier: Optional[str]
    omitted_version: str
    scope: str
    winning_version: str

    @property
    def artifact_key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


def match_conflict_line(line: str) -> Optional[ConflictLine]:
    """Return the parsed annotation, or None for an ordinary tree line."""
    match = CONFLICT_PATTERN.search(line)
    if match is None:
        return None
    return ConflictLine(
        group_id=match.group("group"),
        artifact_id=match.group("artifact"),
        packaging=match.group("type"),
        classifier=match.group("classifier"),
        omitted_version=match.group("version"),
        scope=match.group("scope").strip(),
        winning_version=match.group("winner"),
    )


def parse_tree_conflicts(
    lines: Iterable[str],
    qualifiers: QualifierTable = DEFAULT_QUALIFIERS,
) -> List[DependencyConflict]:
    """Collect conflicts from tree output lines.

    Each annotated line counts once; identical losing/winning pairs of the
    same artifact accumulate. Lines without an annotation are ignored.
    """
    conflicts: Dict[str, DependencyConflict] = {}
    for line in lines:
        parsed = match_conflict_line(line)
        if parsed is None:
            continue
        logger.debug(
            "Found conflict for %s: %s omitted for %s",
            parsed.artifact_key,
            parsed.omitted_version,
            parsed.winning_version,
        )
        version_conflict = VersionConflict(
            ComparableVersion(parsed.omitted_version, qualifiers),
            ComparableVersion(parsed.winning_version, qualifiers),
            1,
        )
        dependency_conflict = conflicts.get(parsed.artifact_key)
        if dependency_conflict is None:
            conflicts[parsed.artifact_key] = DependencyConflict(parsed.artifact_key, [version_conflict])
        else:
            dependency_conflict.add_conflict(version_conflict)
    return list(conflicts.values())


class TreeTextConflictStrategy:
    """Extract conflicts from verbose tree output supplied by ``source``.

    Args:
        source: Callable returning the output lines for a snapshot id, e.g.
            :func:`sources.maven_tree.read_tree_output`.
        qualifiers: Qualifier table used to parse versions.
    """

    def __init__(self, source: LineSource, qualifiers: QualifierTable = DEFAULT_QUALIFIERS) -> None:
        self._source = source
        self._qualifiers = qualifiers

    def collect(self, snapshot: str) -> List[DependencyConflict]:
        logger.debug("Collecting transitive dependency conflicts from tree output for snapshot: %s", snapshot)
        with Timer() as timer:
            conflicts = parse_tree_conflicts(self._source(snapshot), self._qualifiers)
        if is_debug_enabled(logger):
            logger.debug(
                "Found %d dependency conflicts for snapshot: %s",
                len(conflicts),
                snapshot,
                extra=extra_context(
                    event="function_exit",
                    component="strategy",
                    action="collect",
                    strategy="tree",
                    target=snapshot,
                    duration_ms=timer.duration_ms(),
                ),
            )
        return conflicts
