"""Parsing and classification of the scanner's summary report.

Each line of the report holds four fields separated by a comma and a space::

    npm/npmjs/-/lodash/4.17.21, MIT, approved, clearlydefined

The reader is a deliberately cheap CSV parser: there is no quoting or
escaping, so a field that itself contains ``", "`` shifts the fields after
it, and a short line leaves its trailing fields as ``None``.
"""

from __future__ import annotations

import locale
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SEPARATOR = ", "
RESTRICTED_STATUS = "restricted"


@dataclass(frozen=True)
class SummaryEntry:
    """One line of the summary report."""

    dependency: str | None
    license: str | None
    status: str | None
    source: str | None

    @classmethod
    def from_line(cls, line: str) -> SummaryEntry:
        """Split a report line into an entry; missing fields become None."""
        parts: list[str | None] = list(line.split(SEPARATOR))
        parts += [None] * (4 - len(parts))
        dependency, license, status, source = parts[:4]
        return cls(dependency=dependency, license=license, status=status, source=source)

    @property
    def is_restricted(self) -> bool:
        return (
            self.status is not None and self.status.lower() == RESTRICTED_STATUS
        )


def read_summary_lines(summary_path: Path) -> Iterator[SummaryEntry]:
    r"""Yield one :class:`SummaryEntry` per line of the summary, in file order.

    The file is read lazily, one line at a time, and closed once the
    generator is exhausted or discarded.

    Parameters
    ----------
    summary_path : Path
        Summary report written by the scanner.

    Yields
    ------
    SummaryEntry
        The parsed line. Malformed lines never raise.

    Raises
    ------
    FileNotFoundError
        On first iteration, if the summary does not exist.
    """
    with open(summary_path, encoding="utf-8", errors="replace", newline=None) as handle:
        for line in handle:
            yield SummaryEntry.from_line(line.rstrip("\r\n"))


_CODE_POINT_LOCALES = frozenset({"C", "POSIX"})


def _uses_code_point_collation() -> bool:
    current = locale.setlocale(locale.LC_COLLATE) or "C"
    return current.split(".", 1)[0] in _CODE_POINT_LOCALES


def _locale_key(entry: SummaryEntry) -> str:
    return locale.strxfrm(entry.dependency or "")


def _case_folded_key(entry: SummaryEntry) -> tuple[str, str]:
    # Case-insensitive first, lowercase before uppercase on ties.
    name = entry.dependency or ""
    return (name.casefold(), name.swapcase())


def get_restricted_dependencies(entries: Iterable[SummaryEntry]) -> list[SummaryEntry]:
    r"""Return the restricted entries sorted by dependency.

    The status comparison is case-insensitive. Sorting uses the collation of
    the current locale (see :func:`locale.strxfrm`) and is stable. Under the
    ``C``/``POSIX`` locale, where that collation is plain code point order,
    names are compared case-insensitively with lowercase first on ties.

    Parameters
    ----------
    entries : Iterable[SummaryEntry]
        Parsed summary entries; consumed fully.

    Returns
    -------
    list[SummaryEntry]
        Restricted entries in ascending dependency order.

    Examples
    --------
    >>> rows = [SummaryEntry.from_line(s) for s in (
    ...     "b, MIT, Restricted, src", "a, EPL, restricted, src", "c, MIT, approved, src")]
    >>> [e.dependency for e in get_restricted_dependencies(rows)]
    ['a', 'b']
    """
    restricted = [entry for entry in entries if entry.is_restricted]
    key = _case_folded_key if _uses_code_point_collation() else _locale_key
    restricted.sort(key=key)
    logger.info("Found %d restricted dependencies", len(restricted))
    return restricted


__all__ = [
    "RESTRICTED_STATUS",
    "SEPARATOR",
    "SummaryEntry",
    "get_restricted_dependencies",
    "read_summary_lines",
]
