"""Graph-based conflict extraction.

Walks a resolver-built dependency graph, counts how often each version of an
artifact appears anywhere in it, and reports every version other than the one
the resolver selected.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Dict, List, Mapping

from common.logging_utils import Timer, extra_context, is_debug_enabled
from conflicts.dependency_conflict import DependencyConflict
from conflicts.errors import MissingWinnerError
from conflicts.version_conflict import VersionConflict
from graph.models import DependencyNode, GraphSnapshot
from graph.printer import count_nodes, render_tree
from versioning.comparable import ComparableVersion, QualifierTable, DEFAULT_QUALIFIERS

logger = logging.getLogger(__name__)

GraphSource = Callable[[str], GraphSnapshot]


def collect_artifact_versions(
    root: DependencyNode,
    qualifiers: QualifierTable = DEFAULT_QUALIFIERS,
) -> Dict[str, Counter]:
    """Count occurrences of each distinct version per artifact key over the whole graph.

    Nodes without an artifact (a synthetic root) are skipped. Versions that
    differ only in spelling (``1.0`` and ``1.0.0``) count as one version; the
    first spelling seen is kept.
    """
    versions: Dict[str, Counter] = {}
    for node in root.walk():
        if node.artifact is None:
            continue
        version = ComparableVersion(node.artifact.version, qualifiers)
        versions.setdefault(node.artifact.key, Counter())[version] += 1
    return versions


def extract_graph_conflicts(
    root: DependencyNode,
    winners: Mapping[str, str],
    qualifiers: QualifierTable = DEFAULT_QUALIFIERS,
) -> List[DependencyConflict]:
    """Build one :class:`DependencyConflict` per artifact seen with more than one version.

    Args:
        root: Root of the dependency graph.
        winners: Version selected by the resolver for each ``groupId:artifactId``.
        qualifiers: Qualifier table used to parse versions.

    Raises:
        MissingWinnerError: If a conflicting artifact has no entry in ``winners``.
    """
    conflicts: List[DependencyConflict] = []
    for artifact_key, version_counts in collect_artifact_versions(root, qualifiers).items():
        if len(version_counts) < 2:
            continue
        if artifact_key not in winners:
            raise MissingWinnerError(artifact_key, sorted(str(v) for v in version_counts))
        winning = ComparableVersion(winners[artifact_key], qualifiers)

        dependency_conflict = DependencyConflict(artifact_key)
        for version in sorted(version_counts):
            if version == winning:
                continue
            dependency_conflict.add_conflict(VersionConflict(version, winning, version_counts[version]))
        if not dependency_conflict.is_empty():
            conflicts.append(dependency_conflict)
    return conflicts


class GraphConflictStrategy:
    """Extract conflicts from resolver graphs supplied by ``source``.

    Args:
        source: Callable returning the :class:`GraphSnapshot` for a snapshot id.
        qualifiers: Qualifier table used to parse versions.
    """

    def __init__(self, source: GraphSource, qualifiers: QualifierTable = DEFAULT_QUALIFIERS) -> None:
        self._source = source
        self._qualifiers = qualifiers

    def collect(self, snapshot: str) -> List[DependencyConflict]:
        logger.debug("Collecting transitive dependency conflicts for snapshot: %s", snapshot)
        graph = self._source(snapshot)
        if is_debug_enabled(logger):
            logger.debug("Dependency tree summary: %d total dependencies", count_nodes(graph.root))
            for line in render_tree(graph.root, graph.winners):
                logger.debug(line)

        with Timer() as timer:
            conflicts = extract_graph_conflicts(graph.root, graph.winners, self._qualifiers)

        if is_debug_enabled(logger):
            logger.debug(
                "Found %d dependency conflicts for snapshot: %s",
                len(conflicts),
                snapshot,
                extra=extra_context(
                    event="function_exit",
                    component="strategy",
                    action="collect",
                    strategy="graph",
                    target=snapshot,
                    duration_ms=timer.duration_ms(),
                ),
            )
        return conflicts
