"""Colored terminal reporting for the license gate.

All user-facing output of a check goes through this module. Status lines are
written to standard error with a severity prefix, and the per-dependency
listings are written to standard output:

- ``INFO:`` lines in cyan, ``WARN:`` lines in yellow, ``ERROR:`` lines in red.
- Restricted findings as ``X <dependency>, <license>`` in red.
- Stale baseline keys as ``> <dependency>`` in magenta.

Styling is disabled when ``NO_COLOR`` is set or :func:`configure_console` is
called with ``no_color=True``. Markup and automatic highlighting are turned
off so dependency coordinates are printed verbatim.

Canonical Usage
---------------
>>> from license_gate import console
>>> console.configure_console(no_color=True)
>>> console.info("Running dash-licenses...")  # doctest: +SKIP
INFO: Running dash-licenses...
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.text import Text

from license_gate.config import NO_COLOR_ENV

INFO_STYLE = "bright_cyan"
WARN_STYLE = "bright_yellow"
ERROR_STYLE = "bright_red"
HIGHLIGHT_STYLE = "bright_magenta"


def _make_console(stderr: bool, no_color: bool) -> Console:
    # CI logs are not terminals; force styling unless it was turned off.
    return Console(
        stderr=stderr,
        no_color=no_color,
        force_terminal=not no_color,
        color_system=None if no_color else "standard",
        highlight=False,
        soft_wrap=True,
    )


_NO_COLOR: bool = bool(os.environ.get(NO_COLOR_ENV))
_STDOUT: Console = _make_console(stderr=False, no_color=_NO_COLOR)
_STDERR: Console = _make_console(stderr=True, no_color=_NO_COLOR)


def configure_console(no_color: bool | None = None) -> None:
    r"""Recreate the output consoles with the given color setting.

    Parameters
    ----------
    no_color : bool | None, optional
        ``True`` disables ANSI styling. ``None`` re-reads the ``NO_COLOR``
        environment variable.
    """
    global _STDOUT, _STDERR
    if no_color is None:
        no_color = bool(os.environ.get(NO_COLOR_ENV))
    _STDOUT = _make_console(stderr=False, no_color=no_color)
    _STDERR = _make_console(stderr=True, no_color=no_color)


def _emit(target: Console, text: str, style: str | None) -> None:
    target.print(Text(text, style=style or ""), markup=False, highlight=False)


def info(text: str) -> None:
    """Print an informational status line to standard error."""
    _emit(_STDERR, f"INFO: {text}", INFO_STYLE)


def warn(text: str) -> None:
    """Print a warning status line to standard error."""
    _emit(_STDERR, f"WARN: {text}", WARN_STYLE)


def error(text: str) -> None:
    """Print an error status line to standard error."""
    _emit(_STDERR, f"ERROR: {text}", ERROR_STYLE)


def format_annotation(data: Any) -> str:
    """Render a baseline annotation; strings as-is, other values as JSON."""
    if isinstance(data, str):
        return data
    return json.dumps(data, ensure_ascii=False, sort_keys=True)


def restricted_entries(entries: Iterable[Any]) -> None:
    r"""Print each restricted finding as ``X <dependency>, <license>``.

    Parameters
    ----------
    entries : Iterable[SummaryEntry]
        Findings to list, printed in the given order.
    """
    for entry in entries:
        _emit(_STDOUT, f"X {entry.dependency}, {entry.license}", ERROR_STYLE)


def unmatched_baseline_entries(
    unmatched: Iterable[str], baseline: Mapping[str, Any]
) -> None:
    r"""Print stale baseline keys, followed by their annotation when set.

    Parameters
    ----------
    unmatched : Iterable[str]
        Baseline keys that matched no restricted finding.
    baseline : Mapping[str, Any]
        The loaded baseline, used to look up each key's annotation.
    """
    for dependency in unmatched:
        _emit(_STDOUT, f"> {dependency}", HIGHLIGHT_STYLE)
        data = baseline.get(dependency)
        if data or isinstance(data, (dict, list)):
            _emit(_STDERR, f"{dependency}: {format_annotation(data)}", None)


__all__ = [
    "configure_console",
    "error",
    "format_annotation",
    "info",
    "restricted_entries",
    "unmatched_baseline_entries",
    "warn",
]
