"""Invocation of the ``dash-licenses`` scanner against a lockfile.

The scanner writes its summary report to a fixed path. A report left over
from a previous run is moved aside to ``<summary>.old`` first. A failing
scanner is only a warning: it may still have written a usable partial report.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from license_gate import console
from license_gate.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_JAVA,
    DEFAULT_TIMEOUT,
    SUMMARY_BACKUP_SUFFIX,
)
from license_gate.process import error_from_result, run_command

logger = logging.getLogger(__name__)


def backup_summary(summary_path: Path, backup_path: Path | None = None) -> Path | None:
    """Move an existing summary aside, replacing older backups.

    The backup goes to ``backup_path``, by default ``<summary>.old``. Returns
    the backup path, or ``None`` when there was nothing to back up.
    """
    if not summary_path.exists():
        return None
    console.info("Backing up previous summary...")
    backup = backup_path or summary_path.with_name(
        summary_path.name + SUMMARY_BACKUP_SUFFIX
    )
    summary_path.replace(backup)
    logger.info("Moved %s to %s", summary_path, backup)
    return backup


def build_scanner_command(
    jar_path: Path,
    lockfile: Path,
    summary_path: Path,
    *,
    batch: int = DEFAULT_BATCH_SIZE,
    timeout: int = DEFAULT_TIMEOUT,
    java: str = DEFAULT_JAVA,
) -> list[str]:
    """Return the argv that runs the scanner jar."""
    return [
        java,
        "-jar",
        str(jar_path),
        str(lockfile),
        "-batch",
        str(batch),
        "-timeout",
        str(timeout),
        "-summary",
        str(summary_path),
    ]


def run_scanner(
    jar_path: Path,
    lockfile: Path,
    summary_path: Path,
    *,
    batch: int = DEFAULT_BATCH_SIZE,
    timeout: int = DEFAULT_TIMEOUT,
    java: str = DEFAULT_JAVA,
) -> str | None:
    r"""Run the scanner and report, without raising, whether it failed.

    The scanner's standard output is discarded; its standard error stays
    attached to ours so its diagnostics reach the CI log.

    Parameters
    ----------
    jar_path : Path
        The ``dash-licenses`` jar.
    lockfile : Path
        Dependency lockfile to scan.
    summary_path : Path
        Where the scanner writes its summary report.
    batch : int, optional
        Scanner ``-batch`` value.
    timeout : int, optional
        Scanner ``-timeout`` value, in seconds.
    java : str, optional
        Java executable to use.

    Returns
    -------
    str | None
        The warning that was printed if the scanner failed, otherwise None.

    Raises
    ------
    ExternalToolError
        If the Java executable cannot be started.
    """
    console.info("Running dash-licenses...")
    command = build_scanner_command(
        jar_path, lockfile, summary_path, batch=batch, timeout=timeout, java=java
    )
    result = run_command(
        command, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL, stderr=None
    )
    failure = error_from_result(result)
    if failure:
        console.warn(failure)
        logger.info("Scanner failed; continuing with the produced summary")
    return failure
