"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXTRACTION_ERROR = 2
    NEW_CONFLICTS = 3


class Strategies(Enum):
    """Conflict extraction strategies supported by the program.

    Args:
        Enum (string): Strategy names accepted on the command line.
    """

    TREE = "tree"
    GRAPH = "graph"


class OutputFormats(Enum):
    """Export formats for comparison results."""

    JSON = "json"
    CSV = "csv"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_STRATEGIES = [
        Strategies.TREE.value,
        Strategies.GRAPH.value,
    ]
    DEFAULT_STRATEGY = Strategies.TREE.value
    SUPPORTED_FORMATS = [
        OutputFormats.JSON.value,
        OutputFormats.CSV.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "CONFLICTDIFF_LOG_LEVEL"
    CONFIG_SECTION = "conflictdiff"

    # Maven invocation
    MAVEN_EXECUTABLE = "mvn"
    MAVEN_TREE_GOAL = "dependency:tree"
    MAVEN_VERBOSE_FLAG = "-Dverbose"
    MAVEN_TIMEOUT_SEC = 600

    # Maven ComparableVersion qualifier precedence; "" is the release marker.
    QUALIFIER_ORDER = ["alpha", "beta", "milestone", "rc", "snapshot", "", "sp"]
    QUALIFIER_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
    QUALIFIER_SHORTHANDS = {"a": "alpha", "b": "beta", "m": "milestone"}

    FAIL_ON_NEW = False
