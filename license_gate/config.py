"""Global configuration constants and the per-run configuration value.

Defines the filenames, scanner parameters and logging defaults used across
the license gate, and :class:`CheckConfig`, the immutable settings object
created once at startup and handed to every stage of the check.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from license_gate.exceptions import ConfigurationError

# Scanner artifact
DASH_LICENSES_URL: str = (
    "https://repo.eclipse.org/service/local/artifact/maven/redirect"
    "?r=dash-licenses&g=org.eclipse.dash&a=org.eclipse.dash.licenses&v=LATEST"
)
DOWNLOAD_SUBDIR: str = "download"
DASH_LICENSES_JAR_NAME: str = "dash-licenses.jar"

# Inputs and outputs (relative to the project root)
DEFAULT_LOCKFILE: str = "yarn.lock"
DASH_LICENSES_SUMMARY_NAME: str = "license-check-summary.txt"
DASH_LICENSES_BASELINE_NAME: str = "license-check-baseline.json"
SUMMARY_BACKUP_SUFFIX: str = ".old"

# Scanner parameters
DEFAULT_BATCH_SIZE: int = 50
DEFAULT_TIMEOUT: int = 240
DEFAULT_JAVA: str = "java"
DEFAULT_CURL: str = "curl"

# Logging
LOG_SUBDIR: str = "logs"
LOG_FILENAME: str = "license_gate.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "WARNING"

# Environment variable names
ENV_PREFIX: str = "LICENSE_GATE_"
NO_COLOR_ENV: str = "NO_COLOR"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}", context={"variable": name}
        ) from None


def _resolve(root: Path, value: str | os.PathLike[str]) -> Path:
    path = Path(value)
    return path if path.is_absolute() else root / path


@dataclass(frozen=True)
class CheckConfig:
    r"""Immutable settings for a single license check run.

    Attributes
    ----------
    root : Path
        Project root that relative paths are resolved against.
    lockfile : Path
        Dependency lockfile handed to the scanner.
    jar_path : Path
        Local cache location of the ``dash-licenses`` jar.
    summary_path : Path
        Summary report written by the scanner.
    baseline_path : Path
        JSON allow-list of accepted restricted dependencies.
    url : str
        Download location of the scanner jar.
    batch_size : int
        Value passed to the scanner's ``-batch`` flag.
    timeout : int
        Value passed to the scanner's ``-timeout`` flag (seconds).
    java : str
        Java executable used to run the scanner.
    curl : str
        ``curl`` executable used to download the scanner.
    no_color : bool
        Disable ANSI styling of console output.
    log_dir : Path
        Directory receiving the log file.

    Examples
    --------
    >>> from pathlib import Path
    >>> cfg = CheckConfig.from_env(root=Path("/repo"))
    >>> cfg.summary_path.name
    'license-check-summary.txt'
    """

    root: Path
    lockfile: Path
    jar_path: Path
    summary_path: Path
    baseline_path: Path
    url: str = DASH_LICENSES_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    timeout: int = DEFAULT_TIMEOUT
    java: str = DEFAULT_JAVA
    curl: str = DEFAULT_CURL
    no_color: bool = False
    log_dir: Path = Path(LOG_SUBDIR)

    @property
    def summary_backup_path(self) -> Path:
        """Location the previous summary is moved to before a new scan."""
        return self.summary_path.with_name(
            self.summary_path.name + SUMMARY_BACKUP_SUFFIX
        )

    @classmethod
    def from_env(cls, root: Path | None = None, **overrides: Any) -> CheckConfig:
        r"""Build a configuration from the environment and explicit overrides.

        Loads ``<root>/.env`` with ``python-dotenv`` when present, then reads
        the ``LICENSE_GATE_*`` variables and ``NO_COLOR``. Overrides whose
        value is ``None`` are ignored so CLI flags that were not given fall
        back to the environment.

        Parameters
        ----------
        root : Path | None, optional
            Project root. Defaults to ``LICENSE_GATE_ROOT`` or the current
            working directory.
        **overrides : Any
            Field values that take precedence over the environment.

        Returns
        -------
        CheckConfig
            The resolved, immutable configuration.

        Raises
        ------
        ConfigurationError
            If a numeric setting is not an integer or an override names an
            unknown field.
        """
        if root is None:
            root = Path(os.getenv(f"{ENV_PREFIX}ROOT") or Path.cwd())
        root = Path(root).resolve()
        env_path = root / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)

        values: dict[str, Any] = {
            "root": root,
            "lockfile": _resolve(
                root, os.getenv(f"{ENV_PREFIX}LOCKFILE") or DEFAULT_LOCKFILE
            ),
            "jar_path": _resolve(
                root,
                os.getenv(f"{ENV_PREFIX}JAR")
                or Path(DOWNLOAD_SUBDIR) / DASH_LICENSES_JAR_NAME,
            ),
            "summary_path": _resolve(
                root, os.getenv(f"{ENV_PREFIX}SUMMARY") or DASH_LICENSES_SUMMARY_NAME
            ),
            "baseline_path": _resolve(
                root,
                os.getenv(f"{ENV_PREFIX}BASELINE") or DASH_LICENSES_BASELINE_NAME,
            ),
            "url": os.getenv(f"{ENV_PREFIX}URL") or DASH_LICENSES_URL,
            "batch_size": _env_int(f"{ENV_PREFIX}BATCH", DEFAULT_BATCH_SIZE),
            "timeout": _env_int(f"{ENV_PREFIX}TIMEOUT", DEFAULT_TIMEOUT),
            "java": os.getenv(f"{ENV_PREFIX}JAVA") or DEFAULT_JAVA,
            "curl": os.getenv(f"{ENV_PREFIX}CURL") or DEFAULT_CURL,
            "no_color": bool(os.getenv(NO_COLOR_ENV)),
            "log_dir": root / LOG_SUBDIR,
        }

        for key, value in overrides.items():
            if value is None:
                continue
            if key not in values:
                raise ConfigurationError(
                    f"Unknown configuration field: {key}", context={"field": key}
                )
            if key in ("lockfile", "jar_path", "summary_path", "baseline_path"):
                value = _resolve(root, value)
            values[key] = value

        return cls(**values)
