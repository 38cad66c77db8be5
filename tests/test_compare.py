"""Tests for snapshot comparison and direction classification."""

import logging

import pytest

from conflicts.compare import (
    ChangeCategory,
    ConflictComparison,
    ConflictDirection,
    classify,
    compare_conflicts,
    count_directions,
    index_conflicts,
)
from conflicts.dependency_conflict import DependencyConflict
from conflicts.errors import InvariantViolation
from conflicts.version_conflict import VersionConflict


def make(key, *pairs):
    return DependencyConflict(key, [VersionConflict(losing, winning, count) for losing, winning, count in pairs])


class TestCompareConflicts:
    """Resolved / new / changed classification."""

    def test_base_only_is_resolved_with_base_counts(self):
        base_a = make("org.example:a", ("1.0", "2.0", 3))
        result = compare_conflicts([base_a], [])
        assert result.resolved == [base_a]
        assert result.new == [] and result.changed == []
        assert [vc.count for vc in result.resolved[0]] == [3]

    def test_current_only_is_new(self):
        current_b = make("org.example:b", ("1.0", "1.5", 2))
        result = compare_conflicts([], [current_b])
        assert result.new == [current_b]
        assert [vc.count for vc in result.new[0]] == [2]
        assert result.resolved == [] and result.changed == []

    def test_count_difference_is_changed(self):
        result = compare_conflicts(
            [make("org.example:c", ("1.0", "2.0", 2))],
            [make("org.example:c", ("1.0", "2.0", 5))],
        )
        assert len(result.changed) == 1
        changed = result.changed[0]
        assert changed.artifact_key == "org.example:c"
        assert [(str(vc.losing_version), str(vc.winning_version), vc.count) for vc in changed] == [
            ("1.0", "2.0", 3)
        ]

    def test_identical_conflicts_are_omitted(self):
        result = compare_conflicts(
            [make("org.example:d", ("1.0", "2.0", 4))],
            [make("org.example:d", ("1.0", "2.0", 4))],
        )
        assert result.is_empty()
        assert result.summary() == {"resolved": 0, "new": 0, "changed": 0}

    def test_mixed_snapshot(self):
        base = [
            make("org.example:a", ("1.0", "2.0", 3)),
            make("org.example:c", ("1.0", "2.0", 2)),
            make("org.example:d", ("1.0", "2.0", 4)),
        ]
        current = [
            make("org.example:b", ("1.0", "1.5", 2)),
            make("org.example:c", ("1.0", "2.0", 1), ("1.1", "2.0", 1)),
            make("org.example:d", ("1.0", "2.0", 4)),
        ]
        result = compare_conflicts(base, current)
        assert [dc.artifact_key for dc in result.resolved] == ["org.example:a"]
        assert [dc.artifact_key for dc in result.new] == ["org.example:b"]
        assert [dc.artifact_key for dc in result.changed] == ["org.example:c"]
        assert {vc.identity_key(): vc.count for vc in result.changed[0]} == {"1->2": -1, "1.1->2": 1}
        assert result.has_regressions()

    def test_inputs_are_not_modified(self):
        base_c = make("org.example:c", ("1.0", "2.0", 2))
        current_c = make("org.example:c", ("1.0", "2.0", 5))
        compare_conflicts([base_c], [current_c])
        assert [vc.count for vc in base_c] == [2]
        assert [vc.count for vc in current_c] == [5]

    def test_duplicate_keys_rejected(self):
        duplicated = [make("org.example:a", ("1.0", "2.0", 1)), make("org.example:a", ("1.1", "2.0", 1))]
        with pytest.raises(InvariantViolation):
            compare_conflicts(duplicated, [])
        with pytest.raises(InvariantViolation):
            index_conflicts(duplicated, "current")

    def test_debug_logging_does_not_break(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="conflicts.compare"):
            compare_conflicts([make("org.example:a", ("1.0", "2.0", 1))], [])
        assert "Compared conflict snapshots" in caplog.text


class TestRegressions:
    """has_regressions only flags new conflicts or increased counts."""

    def test_only_resolved_is_not_regression(self):
        assert not compare_conflicts([make("org.example:a", ("1.0", "2.0", 1))], []).has_regressions()

    def test_decreased_count_is_not_regression(self):
        result = compare_conflicts(
            [make("org.example:c", ("1.0", "2.0", 5))],
            [make("org.example:c", ("1.0", "2.0", 2))],
        )
        assert not result.has_regressions()


class TestClassify:
    """Upgrade / downgrade / equal presentation classification."""

    def test_upgrade(self):
        assert classify(VersionConflict("1.0", "2.0")) is ConflictDirection.UPGRADE

    def test_downgrade(self):
        assert classify(VersionConflict("5.3.21", "5.3.20")) is ConflictDirection.DOWNGRADE

    def test_equal_is_reported_not_rejected(self):
        assert classify(VersionConflict("1.0", "1.0.0")) is ConflictDirection.EQUAL

    def test_qualifiers_respected(self):
        assert classify(VersionConflict("2.0-RC1", "2.0")) is ConflictDirection.UPGRADE

    def test_count_directions(self):
        conflicts = [
            make("org.example:a", ("1.0", "2.0", 1), ("3.0", "2.0", 1)),
            make("org.example:b", ("1.0", "1.5", 4)),
        ]
        assert count_directions(conflicts) == {
            ConflictDirection.UPGRADE: 2,
            ConflictDirection.DOWNGRADE: 1,
            ConflictDirection.EQUAL: 0,
        }


def test_by_category_order():
    comparison = ConflictComparison()
    assert list(comparison.by_category()) == [ChangeCategory.RESOLVED, ChangeCategory.NEW, ChangeCategory.CHANGED]
