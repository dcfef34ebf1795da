"""Unit tests for summary report parsing and restricted classification."""

import locale
from pathlib import Path

import pytest

from license_gate.summary import (
    SummaryEntry,
    get_restricted_dependencies,
    read_summary_lines,
)


def _write_summary(path: Path, *lines: str) -> Path:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path


def test_from_line_splits_four_fields() -> None:
    entry = SummaryEntry.from_line(
        "npm/npmjs/-/lodash/4.17.21, MIT, approved, clearlydefined"
    )
    assert entry == SummaryEntry(
        dependency="npm/npmjs/-/lodash/4.17.21",
        license="MIT",
        status="approved",
        source="clearlydefined",
    )


def test_from_line_short_line_leaves_trailing_fields_none() -> None:
    entry = SummaryEntry.from_line("npm/npmjs/-/foo/1.0.0, MIT")
    assert entry.dependency == "npm/npmjs/-/foo/1.0.0"
    assert entry.license == "MIT"
    assert entry.status is None
    assert entry.source is None
    assert entry.is_restricted is False


def test_from_line_separator_inside_field_shifts_fields() -> None:
    # No quoting support: a license containing ", " pushes the status along.
    entry = SummaryEntry.from_line("npm/npmjs/-/foo/1.0.0, Apache-2.0, MIT, restricted, x")
    assert entry.license == "Apache-2.0"
    assert entry.status == "MIT"
    assert entry.source == "restricted"
    assert entry.is_restricted is False


def test_read_summary_lines_preserves_file_order(tmp_path: Path) -> None:
    summary = _write_summary(
        tmp_path / "summary.txt",
        "b, MIT, approved, src",
        "a, EPL-2.0, restricted, src",
    )
    assert [e.dependency for e in read_summary_lines(summary)] == ["b", "a"]


def test_read_summary_lines_strips_crlf(tmp_path: Path) -> None:
    summary = tmp_path / "summary.txt"
    summary.write_bytes(b"a, MIT, restricted, clearlydefined\r\n")
    (entry,) = list(read_summary_lines(summary))
    assert entry.source == "clearlydefined"


def test_read_summary_lines_is_lazy(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"
    lines = read_summary_lines(missing)
    # Nothing is opened until the first entry is requested.
    with pytest.raises(FileNotFoundError):
        next(lines)


def test_read_summary_lines_tolerates_blank_lines(tmp_path: Path) -> None:
    summary = _write_summary(tmp_path / "summary.txt", "", "a, MIT, restricted, src")
    entries = list(read_summary_lines(summary))
    assert entries[0] == SummaryEntry("", None, None, None)
    assert [e.dependency for e in get_restricted_dependencies(entries)] == ["a"]


def test_get_restricted_dependencies_case_insensitive_and_sorted() -> None:
    entries = [
        SummaryEntry("B", "lic", "Restricted", "src"),
        SummaryEntry("C", "lic", "approved", "src"),
        SummaryEntry("A", "lic", "restricted", "src"),
    ]
    restricted = get_restricted_dependencies(entries)
    assert [e.dependency for e in restricted] == ["A", "B"]
    assert restricted[1].status == "Restricted"


def test_get_restricted_dependencies_accepts_generator(tmp_path: Path) -> None:
    summary = _write_summary(
        tmp_path / "summary.txt",
        "npm/npmjs/-/zeta/1.0.0, GPL-3.0, RESTRICTED, clearlydefined",
        "npm/npmjs/-/alpha/1.0.0, GPL-2.0, restricted, clearlydefined",
        "npm/npmjs/-/beta/1.0.0, MIT, approved, clearlydefined",
    )
    restricted = get_restricted_dependencies(read_summary_lines(summary))
    assert [e.dependency for e in restricted] == [
        "npm/npmjs/-/alpha/1.0.0",
        "npm/npmjs/-/zeta/1.0.0",
    ]


def test_get_restricted_dependencies_empty() -> None:
    assert get_restricted_dependencies([]) == []


@pytest.fixture
def c_collation():
    """Run with the code point ``C`` collation, restoring the previous one."""
    previous = locale.setlocale(locale.LC_COLLATE)
    locale.setlocale(locale.LC_COLLATE, "C")
    yield
    locale.setlocale(locale.LC_COLLATE, previous)


def test_mixed_case_order_under_c_locale(c_collation) -> None:
    entries = [SummaryEntry(name, "lic", "restricted", "src") for name in "bBaA"]
    restricted = get_restricted_dependencies(entries)
    assert [e.dependency for e in restricted] == ["a", "A", "b", "B"]


def test_scoped_names_under_c_locale(c_collation) -> None:
    entries = [
        SummaryEntry("npm/npmjs/-/Zod/3.0.0", "MIT", "restricted", "src"),
        SummaryEntry("npm/npmjs/-/acorn/8.0.0", "MIT", "restricted", "src"),
    ]
    restricted = get_restricted_dependencies(entries)
    assert [e.dependency for e in restricted] == [
        "npm/npmjs/-/acorn/8.0.0",
        "npm/npmjs/-/Zod/3.0.0",
    ]


def test_read_summary_lines_replaces_undecodable_bytes(tmp_path: Path) -> None:
    summary = tmp_path / "summary.txt"
    summary.write_bytes(b"caf\xe9, MIT, restricted, src\nb, MIT, approved, src\n")
    entries = list(read_summary_lines(summary))
    assert entries[0].dependency == "caf\ufffd"
    assert entries[0].is_restricted is True
    assert entries[1].dependency == "b"
