"""The license check pipeline: fetch, scan, classify, reconcile, report.

:func:`run_check` runs the stages in order and returns ``0`` on success.
Fatal conditions are raised as :class:`~license_gate.exceptions.AppError`
subclasses; the only non-fatal problems are a failing scanner and stale
baseline entries, which are printed as warnings.
"""

from __future__ import annotations

import logging

from license_gate import console
from license_gate.baseline import load_baseline, reconcile
from license_gate.config import CheckConfig
from license_gate.exceptions import ExternalToolError, UnhandledRestrictedError
from license_gate.fetcher import ensure_scanner_jar
from license_gate.scanner import backup_summary, run_scanner
from license_gate.summary import get_restricted_dependencies, read_summary_lines

logger = logging.getLogger(__name__)


def run_check(config: CheckConfig) -> int:
    r"""Run the full license check described by ``config``.

    Parameters
    ----------
    config : CheckConfig
        Paths, scanner parameters and tool locations for this run.

    Returns
    -------
    int
        ``0`` when every restricted dependency is covered by the baseline.

    Raises
    ------
    ExternalToolError
        If the scanner jar cannot be downloaded, a tool cannot be started, or
        no summary report exists after the scan.
    BaselineFormatError
        If the baseline file is malformed.
    UnhandledRestrictedError
        If restricted dependencies are missing from the baseline, or there is
        no baseline and any dependency is restricted. The findings have been
        printed before this is raised.
    """
    ensure_scanner_jar(config.jar_path, config.url, curl=config.curl)
    backup_summary(config.summary_path, config.summary_backup_path)
    run_scanner(
        config.jar_path,
        config.lockfile,
        config.summary_path,
        batch=config.batch_size,
        timeout=config.timeout,
        java=config.java,
    )
    if not config.summary_path.exists():
        raise ExternalToolError(
            f'Summary "{config.summary_path}" was not produced by dash-licenses',
            context={"path": str(config.summary_path)},
            transient=False,
        )

    restricted = get_restricted_dependencies(read_summary_lines(config.summary_path))
    if restricted:
        if config.baseline_path.exists():
            console.info("Checking results against the baseline...")
            baseline = load_baseline(config.baseline_path)
            result = reconcile(restricted, baseline)
            if result.unmatched:
                console.warn(
                    "Some entries in the baseline did not match anything "
                    "from dash-licenses output:"
                )
                console.unmatched_baseline_entries(result.unmatched, baseline)
            if not result.passed:
                console.error("Found results that aren't part of the baseline!")
                console.restricted_entries(result.unhandled)
                raise UnhandledRestrictedError(
                    f"{len(result.unhandled)} restricted dependencies are not "
                    "part of the baseline",
                    result.unhandled,
                    context={"baseline": str(config.baseline_path)},
                )
        else:
            console.error("Found unhandled restricted dependencies!")
            console.restricted_entries(restricted)
            raise UnhandledRestrictedError(
                f"{len(restricted)} restricted dependencies and no baseline",
                restricted,
                context={"baseline": str(config.baseline_path)},
            )
    console.info("Done.")
    return 0
