"""Argument parsing functionality for conflictdiff."""

import argparse

from constants import Constants


def build_parser():
    """Builds the argument parser for the program."""
    parser = argparse.ArgumentParser(
        prog="conflictdiff",
        description=(
            "conflictdiff - Compare transitive dependency version conflicts between two snapshots"
        ),
        add_help=True,
    )

    parser.add_argument("-b", "--base",
                        dest="BASE",
                        help="Base snapshot: captured tree output, graph document, or project directory with --run-maven",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-n", "--current",
                        dest="CURRENT",
                        help="Current snapshot, same kind as --base",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-s", "--strategy",
                        dest="STRATEGY",
                        help="Conflict extraction strategy: tree (verbose dependency:tree output) or graph (graph snapshot document)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_STRATEGIES)
    parser.add_argument("--run-maven",
                        dest="RUN_MAVEN",
                        help="Treat --base/--current as working copies and run 'mvn dependency:tree -Dverbose' in each (tree strategy)",
                        action="store_true")
    parser.add_argument("-m", "--module",
                        dest="MODULE",
                        help="Restrict a multi-module build to this module (passed as -pl)",
                        action="store", type=str)
    parser.add_argument("--maven-executable",
                        dest="MAVEN_EXECUTABLE",
                        help="Maven binary to run (default: mvn)",
                        action="store", type=str)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: CONFLICTDIFF_LOG_LEVEL, then INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--fail-on-new",
                        dest="FAIL_ON_NEW",
                        help="Exit with a non-zero status code if new conflicts or increased counts are found.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print the report to the console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
