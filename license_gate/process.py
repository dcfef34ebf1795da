"""Blocking subprocess runner for the external tools used by the check.

Runs ``curl`` and ``java`` to completion and reports how they ended. A
process that cannot be started at all (binary missing, not executable) is
always fatal and raises :class:`~license_gate.exceptions.ExternalToolError`;
how a non-zero exit or a signal is treated is left to the caller, which
receives a :class:`CommandResult` and can turn it into a message with
:func:`error_from_result`.
"""

from __future__ import annotations

import json
import logging
import signal
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import IO, Any, Union

from license_gate.exceptions import ExternalToolError

logger = logging.getLogger(__name__)

_Stream = Union[None, int, IO[Any]]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished subprocess.

    ``signal`` holds the signal name (e.g. ``'SIGKILL'``) when the process was
    terminated by one, in which case ``returncode`` is negative.
    """

    command: list[str] = field(default_factory=list)
    returncode: int = 0
    signal: str | None = None

    @property
    def ok(self) -> bool:
        return self.signal is None and self.returncode == 0


def pretty_command(command: Sequence[str], indent: int = 2) -> str:
    """Return the command as an indented JSON array of its argv."""
    return json.dumps(list(command), indent=indent)


def _signal_name(returncode: int) -> str | None:
    if returncode >= 0:
        return None
    try:
        return signal.Signals(-returncode).name
    except ValueError:
        return f"SIG{-returncode}"


def run_command(
    command: Sequence[str],
    *,
    stdin: _Stream = None,
    stdout: _Stream = None,
    stderr: _Stream = None,
) -> CommandResult:
    r"""Run a command to completion and capture how it exited.

    Standard streams are inherited unless redirected, mirroring an interactive
    CI step. No timeout is applied by the caller.

    Parameters
    ----------
    command : Sequence[str]
        Program and arguments.
    stdin, stdout, stderr : None | int | IO, optional
        Passed through to :func:`subprocess.run` (e.g. ``subprocess.DEVNULL``).

    Returns
    -------
    CommandResult
        Exit code and, when applicable, the terminating signal.

    Raises
    ------
    ExternalToolError
        If the process could not be started.
    """
    argv = [str(part) for part in command]
    logger.info("Running command: %s", " ".join(argv))
    try:
        proc = subprocess.run(
            argv, stdin=stdin, stdout=stdout, stderr=stderr, check=False
        )
    except OSError as exc:
        logger.error("Failed to start %s: %s", argv[0], exc)
        raise ExternalToolError(
            f"Command {pretty_command(argv)} could not be started: {exc}",
            context={"command": argv},
            transient=False,
        ) from exc
    result = CommandResult(
        command=argv,
        returncode=proc.returncode,
        signal=_signal_name(proc.returncode),
    )
    logger.debug("Command finished: %s", result)
    return result


def error_from_result(result: CommandResult) -> str | None:
    """Return an error message if the process failed, ``None`` otherwise.

    Examples
    --------
    >>> error_from_result(CommandResult(["true"], 0)) is None
    True
    >>> print(error_from_result(CommandResult(["false"], 1)))
    Command [
      "false"
    ] exited with code: 1
    """
    if result.ok:
        return None
    if result.signal is not None:
        return (
            f"Command {pretty_command(result.command)} "
            f"exited with signal: {result.signal}"
        )
    return (
        f"Command {pretty_command(result.command)} "
        f"exited with code: {result.returncode}"
    )


__all__ = ["CommandResult", "error_from_result", "pretty_command", "run_command"]
