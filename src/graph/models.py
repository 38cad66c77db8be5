"""Dependency graph input model for graph-based conflict extraction.

A graph snapshot is the resolver's view of one project state: the full
dependency tree (every path, including versions that lost mediation) and the
winner set, i.e. the single version chosen for each ``groupId:artifactId``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml

from conflicts.errors import ExtractionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """Maven coordinates of one resolved node."""

    group_id: str
    artifact_id: str
    version: str
    extension: str = "jar"
    classifier: str = ""

    @property
    def key(self) -> str:
        """Version-independent identity, ``groupId:artifactId``."""
        return f"{self.group_id}:{self.artifact_id}"

    def coordinate(self) -> str:
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


def parse_coordinate(text: str) -> Artifact:
    """Parse ``groupId:artifactId[:type[:classifier]]:version``.

    Raises:
        ValueError: If the coordinate has fewer than three or more than five parts.
    """
    parts = [p.strip() for p in str(text).strip().split(":")]
    if len(parts) < 3 or len(parts) > 5 or not all(parts):
        raise ValueError(f"Invalid artifact coordinate: {text!r}")
    if len(parts) == 3:
        group_id, artifact_id, version = parts
        return Artifact(group_id, artifact_id, version)
    if len(parts) == 4:
        group_id, artifact_id, extension, version = parts
        return Artifact(group_id, artifact_id, version, extension)
    group_id, artifact_id, extension, classifier, version = parts
    return Artifact(group_id, artifact_id, version, extension, classifier)


@dataclass
class DependencyNode:
    """A node of the dependency graph; the root may carry no artifact."""

    artifact: Optional[Artifact] = None
    scope: Optional[str] = None
    children: List["DependencyNode"] = field(default_factory=list)

    def walk(self) -> Iterator["DependencyNode"]:
        """Yield this node and every descendant, depth-first and pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class GraphSnapshot:
    """Dependency graph plus the resolver's winning version per artifact key."""

    root: DependencyNode
    winners: Dict[str, str] = field(default_factory=dict)


def node_from_dict(data: Mapping[str, Any]) -> DependencyNode:
    """Build a node tree from ``{"artifact": "g:a:jar:1.0", "scope": ..., "children": [...]}``."""
    if not isinstance(data, Mapping):
        raise ValueError(f"Dependency node must be a mapping, got {type(data).__name__}")
    coordinate = data.get("artifact")
    artifact = parse_coordinate(coordinate) if coordinate else None
    children = data.get("children") or []
    if not isinstance(children, list):
        raise ValueError("Dependency node 'children' must be a list")
    return DependencyNode(
        artifact=artifact,
        scope=data.get("scope"),
        children=[node_from_dict(child) for child in children],
    )


def winners_from_data(data: Any) -> Dict[str, str]:
    """Accept either ``{"g:a": "1.0"}`` or a list of coordinates."""
    if data is None:
        return {}
    winners: Dict[str, str] = {}
    if isinstance(data, Mapping):
        for key, version in data.items():
            # YAML reads 1.10 as the float 1.1
            if not isinstance(version, str):
                raise ValueError(
                    f"Winning version for {key} must be a string, got {version!r}; quote it in YAML"
                )
            winners[str(key)] = version
        return winners
    if isinstance(data, list):
        for coordinate in data:
            artifact = parse_coordinate(coordinate)
            winners[artifact.key] = artifact.version
        return winners
    raise ValueError("'resolved' must be a mapping or a list of coordinates")


def snapshot_from_dict(data: Mapping[str, Any]) -> GraphSnapshot:
    if not isinstance(data, Mapping) or "root" not in data:
        raise ValueError("Graph snapshot must be a mapping with a 'root' node")
    return GraphSnapshot(
        root=node_from_dict(data["root"]),
        winners=winners_from_data(data.get("resolved")),
    )


def load_graph_snapshot(path: str) -> GraphSnapshot:
    """Load a graph snapshot document (YAML or JSON) from ``path``.

    Raises:
        ExtractionError: If the file cannot be read or does not describe a graph.
    """
    if not os.path.isfile(path):
        raise ExtractionError(f"Graph snapshot not found: {path}", snapshot=path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ExtractionError(f"Failed to read graph snapshot {path}: {exc}", snapshot=path) from exc
    try:
        snapshot = snapshot_from_dict(data)
    except ValueError as exc:
        raise ExtractionError(f"Invalid graph snapshot {path}: {exc}", snapshot=path) from exc
    logger.debug("Loaded graph snapshot from %s (%d winners)", path, len(snapshot.winners))
    return snapshot
