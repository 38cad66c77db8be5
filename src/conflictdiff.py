"""conflictdiff - compare transitive dependency version conflicts between two snapshots.

    Returns:
        int: Exit code
"""
from __future__ import annotations

import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Tuple

from args import parse_args
from cli_config import Settings, load_config, resolve_settings
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled
from conflicts.compare import ConflictComparison, compare_conflicts
from conflicts.dependency_conflict import DependencyConflict
from conflicts.errors import ConflictDiffError, ExtractionError, MissingWinnerError
from constants import Constants, ExitCodes, Strategies
from graph.models import load_graph_snapshot
from report.export import export
from report.text import render_report
from sources.maven_tree import MavenTreeRunner, read_tree_output
from strategy.base import ConflictDetectionStrategy
from strategy.graph import GraphConflictStrategy
from strategy.tree_text import TreeTextConflictStrategy

logger = logging.getLogger(__name__)

_FILE_HANDLER_NAME = "conflictdiff-file"


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        root = logging.getLogger()
        for handler in list(root.handlers):
            if handler.get_name() == _FILE_HANDLER_NAME:
                root.removeHandler(handler)
                handler.close()
        file_handler = logging.FileHandler(log_file)
        file_handler.set_name(_FILE_HANDLER_NAME)
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        root.addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def build_strategy(settings: Settings, run_maven: bool = False) -> ConflictDetectionStrategy:
    """Create a fresh strategy instance for one snapshot extraction.

    Args:
        settings: Effective settings.
        run_maven: For the tree strategy, run Maven in the snapshot directory
            instead of reading a captured output file.
    """
    if settings.strategy == Strategies.GRAPH.value:
        return GraphConflictStrategy(load_graph_snapshot, settings.qualifiers)
    if run_maven:
        source = MavenTreeRunner(settings.module, settings.maven_executable)
        return TreeTextConflictStrategy(source, settings.qualifiers)
    return TreeTextConflictStrategy(read_tree_output, settings.qualifiers)


def collect_snapshots(
    settings: Settings,
    base: str,
    current: str,
    run_maven: bool = False,
) -> Tuple[List[DependencyConflict], List[DependencyConflict]]:
    """Extract base and current conflicts concurrently.

    Each snapshot gets its own strategy instance; the two sources are
    independent (separate files or working copies), so no ordering is needed.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="conflictdiff") as executor:
        base_future = executor.submit(build_strategy(settings, run_maven).collect, base)
        current_future = executor.submit(build_strategy(settings, run_maven).collect, current)
        return base_future.result(), current_future.result()


def report(comparison: ConflictComparison, quiet: bool = False) -> None:
    if quiet:
        return
    for line in render_report(comparison):
        logging.info(line)


def run(args: Any) -> int:
    """Run a comparison for parsed arguments and return the exit code."""
    _setup_logging(args)
    settings = resolve_settings(args, load_config(getattr(args, "CONFIG", None)))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="run",
                strategy=settings.strategy,
            ),
        )

    if os.path.abspath(args.BASE) == os.path.abspath(args.CURRENT):
        logging.info("Base and current snapshots are the same (%s). Skipping analysis.", args.BASE)
        return ExitCodes.SUCCESS.value

    logging.info("Analyzing dependency conflicts between '%s' and '%s'", args.BASE, args.CURRENT)
    run_maven = bool(getattr(args, "RUN_MAVEN", False))
    if run_maven and settings.strategy != Strategies.TREE.value:
        logging.warning("--run-maven only applies to the tree strategy; ignoring it.")
        run_maven = False

    with Timer() as timer:
        try:
            base_conflicts, current_conflicts = collect_snapshots(settings, args.BASE, args.CURRENT, run_maven)
        except MissingWinnerError as e:
            logging.error("Inconsistent resolver output: %s", e)
            return ExitCodes.EXTRACTION_ERROR.value
        except ExtractionError as e:
            logging.error("Failed to collect dependency conflicts: %s", e)
            return ExitCodes.EXTRACTION_ERROR.value
        except ConflictDiffError as e:
            logging.error("Failed to analyze dependency conflicts: %s", e)
            return ExitCodes.EXTRACTION_ERROR.value

    logger.debug(
        "Collected %d base and %d current conflicts in %.1f ms",
        len(base_conflicts),
        len(current_conflicts),
        timer.duration_ms(),
    )

    comparison = compare_conflicts(base_conflicts, current_conflicts)
    report(comparison, getattr(args, "QUIET", False))

    if getattr(args, "OUTPUT", None):
        export(comparison, args.OUTPUT, getattr(args, "OUTPUT_FORMAT", None))

    if settings.fail_on_new and comparison.has_regressions():
        logging.error("New dependency conflicts present, exiting with non-zero status code.")
        return ExitCodes.NEW_CONFLICTS.value
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
