"""Minimal runner for the license gate.

Its single responsibility is to let CI call the gate from a checkout without
installing the package first. All arguments are forwarded to
``license_gate.cli.main``.

Usage:
    python check_licenses.py [--lockfile yarn.lock] [--baseline FILE] [--no-color]

"""

from __future__ import annotations

import sys


def entry_point(argv: list[str] | None = None) -> int:
    """Run the license gate and return its exit code.

    The CLI is imported inside the function so importing this launcher stays
    cheap.
    """
    from license_gate.cli import main

    return main(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(entry_point())
