"""Render a dependency graph the way ``mvn dependency:tree -Dverbose`` prints it."""

from __future__ import annotations

from typing import List, Mapping, Optional

from versioning.comparable import ComparableVersion

from .models import DependencyNode

_BRANCH = "+- "
_LAST = "\\- "
_PIPE = "|  "
_SPACE = "   "


def format_node(node: DependencyNode) -> str:
    """``groupId:artifactId:type[:classifier]:version[:scope]`` or ``unknown``."""
    if node.artifact is None:
        return "unknown"
    text = node.artifact.coordinate()
    if node.scope:
        text += f":{node.scope}"
    return text


def _format_child(node: DependencyNode, winners: Optional[Mapping[str, str]]) -> str:
    text = format_node(node)
    if winners is None or node.artifact is None:
        return text
    winner = winners.get(node.artifact.key)
    if winner is None or ComparableVersion(node.artifact.version) == ComparableVersion(winner):
        return text
    return f"({text} - omitted for conflict with {winner})"


def render_tree(root: Optional[DependencyNode], winners: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the tree as text lines, root first.

    With ``winners``, nodes whose version lost mediation are printed in the
    verbose ``(... - omitted for conflict with X)`` form.
    """
    if root is None:
        return []
    lines = [format_node(root)]

    def _render(children: List[DependencyNode], prefix: str) -> None:
        for index, child in enumerate(children):
            last = index == len(children) - 1
            lines.append(prefix + (_LAST if last else _BRANCH) + _format_child(child, winners))
            if child.children:
                _render(child.children, prefix + (_SPACE if last else _PIPE))

    _render(root.children, "")
    return lines


def count_nodes(root: Optional[DependencyNode]) -> int:
    """Total number of nodes, root included."""
    if root is None:
        return 0
    return sum(1 for _ in root.walk())
