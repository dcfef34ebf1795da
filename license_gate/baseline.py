"""Baseline allow-list loading and reconciliation.

The baseline lists restricted dependencies that were reviewed and accepted.
It is a JSON file in one of two shapes::

    ["npm/npmjs/-/foo/1.0.0", "npm/npmjs/-/bar/2.0.0"]

    {"npm/npmjs/-/foo/1.0.0": null, "npm/npmjs/-/bar/2.0.0": "CQ 12345"}

Both are resolved into a single read-only mapping from coordinate to an
optional annotation, so nothing downstream needs to know which shape was used.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from license_gate.exceptions import BaselineFormatError
from license_gate.summary import SummaryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """Result of comparing restricted findings against the baseline.

    ``unhandled`` keeps the order of the restricted findings; ``unmatched``
    keeps the order of the baseline file.
    """

    unhandled: tuple[SummaryEntry, ...] = ()
    unmatched: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.unhandled


def load_baseline(baseline_path: Path) -> Mapping[str, Any]:
    r"""Load the baseline file into a read-only coordinate-to-annotation map.

    Parameters
    ----------
    baseline_path : Path
        JSON file holding either an array of coordinates or an object mapping
        coordinates to annotations.

    Returns
    -------
    Mapping[str, Any]
        Coordinates in file order. Array entries map to ``None``.

    Raises
    ------
    BaselineFormatError
        If the file is not valid JSON, its root is neither an array nor an
        object, or an array element is not a string.

    Examples
    --------
    >>> import json, tempfile, pathlib
    >>> p = pathlib.Path(tempfile.mkdtemp()) / "baseline.json"
    >>> _ = p.write_text(json.dumps(["A", "B"]))
    >>> dict(load_baseline(p))
    {'A': None, 'B': None}
    """
    invalid = f'Invalid format for "{baseline_path}"'
    try:
        data = json.loads(Path(baseline_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise BaselineFormatError(
            f"{invalid}: {exc}", context={"path": str(baseline_path)}
        ) from exc

    if isinstance(data, list):
        if not all(isinstance(item, str) for item in data):
            raise BaselineFormatError(
                f"{invalid}: array entries must be strings",
                context={"path": str(baseline_path)},
            )
        entries: dict[str, Any] = dict.fromkeys(data)
    elif isinstance(data, dict):
        entries = dict(data)
    else:
        raise BaselineFormatError(
            invalid,
            context={"path": str(baseline_path), "root": type(data).__name__},
        )
    logger.info("Loaded %d baseline entries from %s", len(entries), baseline_path)
    return MappingProxyType(entries)


def reconcile(
    restricted: Iterable[SummaryEntry], baseline: Mapping[str, Any]
) -> Reconciliation:
    r"""Compare restricted findings with the baseline.

    Every finding whose dependency is a baseline key is accepted and marks
    that key as matched. Findings without a baseline key are unhandled;
    baseline keys that no finding matched are stale.

    Parameters
    ----------
    restricted : Iterable[SummaryEntry]
        Restricted findings from the current scan.
    baseline : Mapping[str, Any]
        Loaded baseline (see :func:`load_baseline`).

    Returns
    -------
    Reconciliation
        Unhandled findings and unmatched baseline keys. The inputs are not
        modified, so repeated calls give equal results.
    """
    unmatched = dict.fromkeys(baseline)
    unhandled: list[SummaryEntry] = []
    for entry in restricted:
        if entry.dependency in baseline:
            unmatched.pop(entry.dependency, None)
        else:
            unhandled.append(entry)
    return Reconciliation(unhandled=tuple(unhandled), unmatched=tuple(unmatched))


__all__ = ["Reconciliation", "load_baseline", "reconcile"]
