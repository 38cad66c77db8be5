"""Conflict extraction strategies."""

from .base import ConflictDetectionStrategy
from .graph import GraphConflictStrategy, extract_graph_conflicts
from .tree_text import TreeTextConflictStrategy, parse_tree_conflicts

__all__ = [
    "ConflictDetectionStrategy",
    "GraphConflictStrategy",
    "TreeTextConflictStrategy",
    "extract_graph_conflicts",
    "parse_tree_conflicts",
]
