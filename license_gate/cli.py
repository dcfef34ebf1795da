"""CLI entrypoint and logging/argument utilities for the license gate.

This module is the single top-level routine of a check: it parses
arguments, configures logging and console colors, builds the run
configuration and invokes :func:`license_gate.check.run_check`. Every fatal
condition, expected or not, is printed and mapped to exit code ``1``.

Examples
--------
CLI usage:

>>> # In shell
>>> license-gate --lockfile yarn.lock --baseline license-check-baseline.json
INFO: Running dash-licenses...
INFO: Done.
"""

from __future__ import annotations

import argparse
import locale
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from license_gate import console
from license_gate.check import run_check
from license_gate.config import (
    DEFAULT_LOG_LEVEL,
    LOG_FILENAME,
    LOG_FORMAT,
    LOG_SUBDIR,
    CheckConfig,
)
from license_gate.exceptions import AppError, UnhandledRestrictedError

logger = logging.getLogger(__name__)


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL,
    enable_file: bool = True,
    log_dir: Path | None = None,
) -> None:
    r"""Configure logging output for the CLI.

    Sets up a console handler (always) and optionally a file handler, using
    the format from :mod:`license_gate.config`. Failures to create the file
    handler (read-only checkout, missing permissions) are suppressed.

    Parameters
    ----------
    level : str, optional
        Logging level name, e.g. ``"DEBUG"`` or ``"INFO"``. Unknown names fall
        back to ``WARNING``.
    enable_file : bool, optional
        Whether to also write to ``<log_dir>/license_gate.log``.
    log_dir : Path | None, optional
        Directory for the log file. Defaults to ``logs`` under the current
        working directory.

    Notes
    -----
    All existing root handlers are removed and replaced.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        target = log_dir or Path.cwd() / LOG_SUBDIR
        try:
            target.mkdir(parents=True, exist_ok=True)
            handlers.insert(0, logging.FileHandler(target / LOG_FILENAME, mode="a"))
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _use_locale_collation() -> None:
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Locale collation unavailable; using code point order")


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the license gate.

    Options that are not given are ``None`` so the environment and the
    defaults in :mod:`license_gate.config` apply.
    """
    parser = argparse.ArgumentParser(
        prog="license-gate",
        description=(
            "Run dash-licenses against a lockfile and fail on restricted "
            "dependencies that are not part of the baseline."
        ),
    )
    parser.add_argument("--lockfile", type=Path, default=None)
    parser.add_argument("--summary", type=Path, default=None)
    parser.add_argument("--baseline", type=Path, default=None)
    parser.add_argument("--jar", type=Path, default=None)
    parser.add_argument("--url", type=str, default=None)
    parser.add_argument("--batch", type=int, default=None)
    parser.add_argument("--timeout", type=int, default=None)
    parser.add_argument(
        "--no-color", action="store_true", default=None, help="Disable ANSI colors."
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the license gate CLI and return the process exit code."""
    try:
        args = parse_arguments(argv)
    except SystemExit as exc:
        # argparse exits 2 on usage errors; every failure of the gate is 1.
        return 0 if exc.code in (0, None) else 1
    _disable_file = bool(
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )
    console.configure_console(no_color=True if args.no_color else None)
    try:
        config = CheckConfig.from_env(
            lockfile=args.lockfile,
            summary_path=args.summary,
            baseline_path=args.baseline,
            jar_path=args.jar,
            url=args.url,
            batch_size=args.batch,
            timeout=args.timeout,
            no_color=args.no_color,
        )
        configure_logging(
            args.log_level, enable_file=not _disable_file, log_dir=config.log_dir
        )
        console.configure_console(no_color=config.no_color)
        _use_locale_collation()
        logger.info("Starting license check in %s", config.root)
        return run_check(config)
    except UnhandledRestrictedError as exc:
        logger.info("Check failed: %s", exc)
        return 1
    except AppError as exc:
        logger.debug("Check aborted: %s", exc.to_dict())
        console.error(exc.message)
        return 1
    except KeyboardInterrupt:
        console.error("Interrupted")
        return 1
    except Exception as exc:
        logger.exception("Unexpected error during license check")
        console.error(f"{type(exc).__name__}: {exc}")
        return 1


__all__ = ["configure_logging", "main", "parse_arguments"]
