"""Tests for graph-based conflict extraction."""

import pytest

from conflicts.errors import MissingWinnerError
from graph.models import Artifact, DependencyNode, GraphSnapshot
from graph.printer import render_tree
from strategy.base import ConflictDetectionStrategy
from strategy.graph import GraphConflictStrategy, collect_artifact_versions, extract_graph_conflicts
from strategy.tree_text import parse_tree_conflicts


def node(coordinate, *children, scope="compile"):
    group_id, artifact_id, version = coordinate.split(":")
    return DependencyNode(Artifact(group_id, artifact_id, version), scope, list(children))


@pytest.fixture
def graph():
    """Root with org.lib:lib present at 1.0 (twice, once spelled 1.0.0) and 2.0."""
    return DependencyNode(
        artifact=None,
        children=[
            node("org.a:a:1.0", node("org.lib:lib:1.0")),
            node("org.b:b:1.0", node("org.lib:lib:2.0"), node("org.util:util:3.1")),
            node("org.c:c:1.0", node("org.lib:lib:1.0.0"), node("org.util:util:3.1")),
        ],
    )


@pytest.fixture
def winners():
    return {
        "org.a:a": "1.0",
        "org.b:b": "1.0",
        "org.c:c": "1.0",
        "org.lib:lib": "2.0",
        "org.util:util": "3.1",
    }


def test_counts_versions_across_whole_graph(graph):
    versions = collect_artifact_versions(graph)
    assert sorted(versions) == ["org.a:a", "org.b:b", "org.c:c", "org.lib:lib", "org.util:util"]
    assert {str(v): n for v, n in versions["org.lib:lib"].items()} == {"1.0": 2, "2.0": 1}
    assert sum(versions["org.util:util"].values()) == 2


def test_emits_one_pair_per_losing_version(graph, winners):
    conflicts = extract_graph_conflicts(graph, winners)
    assert [dc.artifact_key for dc in conflicts] == ["org.lib:lib"]
    pairs = [(str(vc.losing_version), str(vc.winning_version), vc.count) for vc in conflicts[0]]
    assert pairs == [("1.0", "2.0", 2)]


def test_single_version_artifact_produces_nothing(winners):
    root = DependencyNode(children=[node("org.a:a:1.0", node("org.util:util:3.1")), node("org.util:util:3.1")])
    assert extract_graph_conflicts(root, winners) == []


def test_missing_winner_raises(graph, winners):
    del winners["org.lib:lib"]
    with pytest.raises(MissingWinnerError) as excinfo:
        extract_graph_conflicts(graph, winners)
    assert excinfo.value.artifact_key == "org.lib:lib"
    assert "org.lib:lib" in str(excinfo.value)


def test_missing_winner_ignored_for_single_version(graph, winners):
    del winners["org.util:util"]
    assert [dc.artifact_key for dc in extract_graph_conflicts(graph, winners)] == ["org.lib:lib"]


def test_winner_not_in_graph_reports_every_version():
    root = DependencyNode(children=[node("org.lib:lib:1.0"), node("org.lib:lib:1.5"), node("org.lib:lib:1.5")])
    conflicts = extract_graph_conflicts(root, {"org.lib:lib": "3.0"})
    assert {vc.identity_key(): vc.count for vc in conflicts[0]} == {"1->3": 1, "1.5->3": 2}


def test_root_artifact_counted():
    root = node("org.lib:lib:1.0", node("org.x:x:1.0", node("org.lib:lib:2.0")))
    conflicts = extract_graph_conflicts(root, {"org.lib:lib": "1.0", "org.x:x": "1.0"})
    assert [(str(vc.losing_version), vc.count) for vc in conflicts[0]] == [("2.0", 1)]


def test_strategy_uses_source_per_snapshot(graph, winners):
    calls = []

    def source(snapshot):
        calls.append(snapshot)
        return GraphSnapshot(graph, winners)

    strategy = GraphConflictStrategy(source)
    assert isinstance(strategy, ConflictDetectionStrategy)
    conflicts = strategy.collect("feature/x")
    assert calls == ["feature/x"]
    assert [dc.artifact_key for dc in conflicts] == ["org.lib:lib"]


def test_agrees_with_text_strategy_on_rendered_tree(graph, winners):
    from_graph = extract_graph_conflicts(graph, winners)
    from_text = parse_tree_conflicts(render_tree(graph, winners))
    assert from_graph == from_text
