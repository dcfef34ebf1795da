"""Allow ``python -m license_gate``."""

from license_gate.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
