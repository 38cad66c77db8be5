"""Sources of ``mvn dependency:tree -Dverbose`` text for the text-based strategy.

Output can come from running Maven in a working copy or from a file captured
earlier. Either way the result is a list of lines; a failure raises
:class:`ExtractionError` and is never retried.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from conflicts.errors import ExtractionError
from constants import Constants

logger = logging.getLogger(__name__)


def build_tree_command(
    module: Optional[str] = None,
    executable: str = Constants.MAVEN_EXECUTABLE,
    extra_args: Sequence[str] = (),
) -> List[str]:
    """Return the Maven command line that prints the verbose dependency tree.

    Args:
        module: Restrict a multi-module build to this module (``-pl``).
        executable: Maven binary, e.g. ``mvn`` or ``./mvnw``.
        extra_args: Additional arguments appended as is.
    """
    command = [executable, Constants.MAVEN_TREE_GOAL, Constants.MAVEN_VERBOSE_FLAG]
    if module:
        command.extend(["-pl", module])
    command.extend(extra_args)
    return command


def run_dependency_tree(
    basedir: str,
    module: Optional[str] = None,
    executable: str = Constants.MAVEN_EXECUTABLE,
    extra_args: Sequence[str] = (),
    timeout: int = Constants.MAVEN_TIMEOUT_SEC,
) -> List[str]:
    """Run Maven in ``basedir`` and return its combined stdout/stderr lines.

    Raises:
        ExtractionError: If the directory is missing, Maven cannot be started,
            times out or exits with a non-zero status.
    """
    if not os.path.isdir(basedir):
        raise ExtractionError(f"Project directory not found: {basedir}", snapshot=basedir)

    command = build_tree_command(module, executable, extra_args)
    logger.debug("Executing command: %s", " ".join(command))

    with Timer() as timer:
        try:
            result = subprocess.run(  # noqa: S603
                command,
                cwd=basedir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ExtractionError(f"Maven executable not found: {executable}", snapshot=basedir) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExtractionError(
                f"Maven dependency:tree timed out after {timeout}s in {basedir}", snapshot=basedir
            ) from exc

    lines = (result.stdout or "").splitlines()
    if is_debug_enabled(logger):
        logger.debug(
            "Maven dependency:tree finished",
            extra=extra_context(
                event="process_exit",
                component="source",
                action="run_dependency_tree",
                target=basedir,
                status_code=result.returncode,
                duration_ms=timer.duration_ms(),
            ),
        )
        for line in lines:
            logger.debug("Maven output: %s", line)

    if result.returncode != 0:
        raise ExtractionError(
            f"Maven dependency:tree command failed with exit code: {result.returncode}",
            snapshot=basedir,
        )
    return lines


def read_tree_output(path: str) -> List[str]:
    """Read captured tree output, one entry per line.

    Raises:
        ExtractionError: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read().splitlines()
    except FileNotFoundError as exc:
        raise ExtractionError(f"Tree output file not found: {path}", snapshot=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Failed to read tree output {path}: {exc}", snapshot=path) from exc


class MavenTreeRunner:
    """Line source that runs Maven in the working copy named by the snapshot id."""

    def __init__(
        self,
        module: Optional[str] = None,
        executable: str = Constants.MAVEN_EXECUTABLE,
        extra_args: Sequence[str] = (),
    ) -> None:
        self.module = module
        self.executable = executable
        self.extra_args = tuple(extra_args)

    def __call__(self, basedir: str) -> List[str]:
        return run_dependency_tree(basedir, self.module, self.executable, self.extra_args)
