"""Plain-text report of a conflict comparison."""

from __future__ import annotations

from typing import Dict, List, Sequence

from conflicts.compare import (
    ChangeCategory,
    ConflictComparison,
    ConflictDirection,
    classify,
    count_directions,
)
from conflicts.dependency_conflict import DependencyConflict

HEADERS = ("ARTIFACT", "VERSION CONFLICT", "TYPE", "COUNT")

_TITLES: Dict[ChangeCategory, str] = {
    ChangeCategory.RESOLVED: "RESOLVED CONFLICTS (present in base but not in current):",
    ChangeCategory.NEW: "NEW CONFLICTS (present in current but not in base):",
    ChangeCategory.CHANGED: "CHANGED CONFLICTS (count difference between base and current):",
}


def format_count(count: int, category: ChangeCategory) -> str:
    """Counts of changed conflicts carry an explicit sign."""
    if category is ChangeCategory.CHANGED and count > 0:
        return f"+{count}"
    return str(count)


def _rule(widths: Sequence[int]) -> str:
    return "+" + "+".join("-" * (w + 2) for w in widths) + "+"


def _row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "|" + "|".join(f" {cell.ljust(w)} " for cell, w in zip(cells, widths)) + "|"


def render_table(conflicts: List[DependencyConflict], category: ChangeCategory) -> List[str]:
    """One row per version pair; the artifact key is only printed on its first row."""
    rows: List[tuple] = []
    separators = set()
    for dependency_conflict in conflicts:
        for index, version_conflict in enumerate(dependency_conflict):
            rows.append((
                dependency_conflict.artifact_key if index == 0 else "",
                f"{version_conflict.losing_version} -> {version_conflict.winning_version}",
                classify(version_conflict).name,
                format_count(version_conflict.count, category),
            ))
        if len(dependency_conflict) > 1:
            separators.add(len(rows))

    widths = [len(h) for h in HEADERS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    lines = [_rule(widths), _row(HEADERS, widths), _rule(widths)]
    for position, row in enumerate(rows, start=1):
        lines.append(_row(row, widths))
        if position in separators and position != len(rows):
            lines.append(_rule(widths))
    lines.append(_rule(widths))
    return lines


def render_direction_summary(conflicts: List[DependencyConflict]) -> List[str]:
    counts = count_directions(conflicts)
    parts = []
    if counts[ConflictDirection.UPGRADE]:
        parts.append(f"{counts[ConflictDirection.UPGRADE]} upgrades")
    if counts[ConflictDirection.DOWNGRADE]:
        parts.append(f"{counts[ConflictDirection.DOWNGRADE]} downgrades")
    if counts[ConflictDirection.EQUAL]:
        parts.append(f"{counts[ConflictDirection.EQUAL]} equal")
    if not parts:
        return []
    lines = ["   " + ", ".join(parts)]
    if counts[ConflictDirection.DOWNGRADE]:
        lines.append("   Downgrades may indicate missing features or potential compatibility issues")
    return lines


def render_report(comparison: ConflictComparison) -> List[str]:
    """Return the report as lines ready to be logged or printed."""
    if comparison.is_empty():
        return ["No conflict differences found between snapshots."]

    lines = ["Transitive dependency conflict differences found between snapshots:", ""]
    for category, conflicts in comparison.by_category().items():
        if not conflicts:
            continue
        lines.append(_TITLES[category])
        lines.extend(render_table(conflicts, category))
        lines.extend(render_direction_summary(conflicts))
        lines.append("")

    summary = comparison.summary()
    lines.append(
        f"SUMMARY: {summary['resolved']} resolved, {summary['new']} new, {summary['changed']} changed"
    )
    return lines
