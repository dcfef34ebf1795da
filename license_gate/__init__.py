"""Third-party license gate for CI pipelines.

Runs the Eclipse ``dash-licenses`` scanner against a dependency lockfile,
collects the dependencies it classifies as *restricted*, and compares them
against a reviewed baseline allow-list. The run fails when a restricted
dependency is not part of the baseline.

Package Structure
-----------------
- `config.py`: Filenames, scanner parameters and :class:`CheckConfig`.
- `exceptions.py`: Application exception hierarchy.
- `console.py`: Colored status and finding output.
- `process.py`: Blocking subprocess runner.
- `fetcher.py`: Download of the scanner jar.
- `scanner.py`: Summary backup and scanner invocation.
- `summary.py`: Summary report parsing and restricted classification.
- `baseline.py`: Baseline loading and reconciliation.
- `check.py`: The end-to-end check.
- `cli.py`: Command-line entrypoint.

Examples
--------
>>> from license_gate.cli import main
>>> main(["--no-color"])  # doctest: +SKIP
0
"""

__version__ = "1.0.0"
