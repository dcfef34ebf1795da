"""Errors that stop a license check.

Every fatal condition of a run is an ``AppError``: a bad setting, a baseline
that is neither a JSON array nor an object, ``curl`` or ``java`` failing in a
way the check cannot recover from, and restricted dependencies the baseline
does not cover. The CLI prints the message and exits with ``1``.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence


class AppError(Exception):
    """A failure that ends the license check.

    Parameters
    ----------
    code : str
        Upper-case identifier of the failure kind, such as
        ``'EXTERNAL_TOOL_ERROR'``.
    message : str
        Text shown to the user after ``ERROR:``.
    context : Mapping[str, Any] | None, optional
        Paths, commands or settings involved, for the debug log.
    transient : bool, optional
        True when rerunning the CI job could succeed, e.g. after a network
        hiccup during the jar download.

    Attributes
    ----------
    code : str
        Upper-case identifier of the failure kind.
    message : str
        Text shown to the user.
    context : dict
        Copy of the context mapping.
    transient : bool
        Whether a rerun could succeed.

    Examples
    --------
    >>> e = AppError('EXTERNAL_TOOL_ERROR', 'curl failed', context={'url': 'x'})
    >>> str(e)
    'EXTERNAL_TOOL_ERROR: curl failed'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a flat mapping for the debug log."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """A ``LICENSE_GATE_*`` setting or CLI override could not be used."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class BaselineFormatError(AppError):
    """Raised when the baseline file is not a JSON array or object."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "BASELINE_FORMAT_ERROR", message, context=context, transient=False
        )


class ExternalToolError(AppError):
    """Raised when ``curl`` or ``java`` cannot be started or the download fails."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(
            "EXTERNAL_TOOL_ERROR", message, context=context, transient=transient
        )


class UnhandledRestrictedError(AppError):
    """Raised when restricted dependencies are not covered by the baseline.

    The offending entries are kept on ``entries`` so callers can report them;
    by the time this is raised the check has already printed them.
    """

    __slots__ = ("entries",)

    def __init__(
        self,
        message: str,
        entries: Sequence[Any] = (),
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            "UNHANDLED_RESTRICTED_ERROR", message, context=context, transient=False
        )
        self.entries = tuple(entries)
