"""Download of the ``dash-licenses`` scanner jar.

The jar is cached on disk and only fetched when missing. The download is a
single ``curl -L`` invocation; any failure aborts the check.
"""

from __future__ import annotations

import logging
from pathlib import Path

from license_gate import console
from license_gate.config import DEFAULT_CURL
from license_gate.exceptions import ExternalToolError
from license_gate.process import error_from_result, run_command

logger = logging.getLogger(__name__)


def ensure_scanner_jar(jar_path: Path, url: str, *, curl: str = DEFAULT_CURL) -> bool:
    r"""Make sure the scanner jar exists locally, downloading it if needed.

    Parameters
    ----------
    jar_path : Path
        Cache location of the jar. Parent directories are created as needed.
    url : str
        Location to download the jar from.
    curl : str, optional
        ``curl`` executable to use.

    Returns
    -------
    bool
        True if the jar was downloaded, False if it was already cached.

    Raises
    ------
    ExternalToolError
        If ``curl`` cannot be started, exits non-zero or is killed by a
        signal. Any partial download is removed first.
    """
    if jar_path.exists():
        logger.debug("Using cached scanner jar at %s", jar_path)
        return False

    console.info("Fetching dash-licenses...")
    jar_path.parent.mkdir(parents=True, exist_ok=True)
    result = run_command([curl, "-L", url, "-o", str(jar_path)])
    failure = error_from_result(result)
    if failure:
        jar_path.unlink(missing_ok=True)
        raise ExternalToolError(
            failure,
            context={"command": result.command, "returncode": result.returncode},
        )
    logger.info("Downloaded scanner jar to %s", jar_path)
    return True
