"""JSON and CSV export of a conflict comparison."""

from __future__ import annotations

import csv
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from conflicts.compare import ConflictComparison, classify
from constants import ExitCodes, OutputFormats

CSV_HEADERS = [
    "category",
    "artifact",
    "losing_version",
    "winning_version",
    "direction",
    "count",
]


def comparison_to_dict(comparison: ConflictComparison) -> Dict[str, Any]:
    """Serializable view of a comparison, with a direction per version pair."""
    data: Dict[str, Any] = {"summary": comparison.summary()}
    for category, conflicts in comparison.by_category().items():
        entries = []
        for dependency_conflict in conflicts:
            entry = dependency_conflict.to_dict()
            for record, version_conflict in zip(entry["conflicts"], dependency_conflict):
                record["direction"] = classify(version_conflict).value
            entries.append(entry)
        data[category.value] = entries
    return data


def comparison_rows(comparison: ConflictComparison) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for category, conflicts in comparison.by_category().items():
        for dependency_conflict in conflicts:
            for version_conflict in dependency_conflict:
                rows.append([
                    category.value,
                    dependency_conflict.artifact_key,
                    str(version_conflict.losing_version),
                    str(version_conflict.winning_version),
                    classify(version_conflict).value,
                    version_conflict.count,
                ])
    return rows


def export_json(comparison: ConflictComparison, path: str) -> None:
    """Exports the comparison to a JSON file.

    Args:
        comparison (ConflictComparison): Comparison to export.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(comparison_to_dict(comparison), file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_csv(comparison: ConflictComparison, path: str) -> None:
    """Exports the comparison to a CSV file, one row per version pair.

    Args:
        comparison (ConflictComparison): Comparison to export.
        path (str): File path to export the CSV.
    """
    rows = [CSV_HEADERS] + comparison_rows(comparison)
    try:
        with open(path, "w", newline="", encoding="utf-8") as file:
            csv.writer(file).writerows(rows)
        logging.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logging.error("CSV file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def resolve_format(path: str, requested: Optional[str] = None) -> str:
    """Pick the export format from ``requested`` or the file extension; JSON by default."""
    if requested:
        return requested.lower()
    if path.lower().endswith(".csv"):
        return OutputFormats.CSV.value
    return OutputFormats.JSON.value


def export(comparison: ConflictComparison, path: str, requested: Optional[str] = None) -> None:
    if resolve_format(path, requested) == OutputFormats.CSV.value:
        export_csv(comparison, path)
    else:
        export_json(comparison, path)
