"""Error taxonomy for the literate documentation pipeline.

Every failure is fatal for the whole run: the CLI catches
:class:`LiterateError`, logs its message, and exits non-zero.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class LiterateError(RuntimeError):
    """Base class for errors that abort a documentation run."""


class ConfigError(LiterateError, ValueError):
    """Raised when the YAML configuration is invalid or incomplete."""


class UnknownLanguageError(LiterateError):
    """Raised when a source file's extension has no registered language."""

    def __init__(self, extension: str, known: typ.Iterable[str] = ()) -> None:
        self.extension = extension
        known_list = ", ".join(sorted(known)) or "none"
        msg = f"No language registered for extension '{extension}' (known: {known_list})."
        super().__init__(msg)


class SourceIOError(LiterateError):
    """Raised when a source cannot be read or decoded, or an output cannot be written."""

    def __init__(
        self, path: Path, operation: str, cause: OSError | UnicodeDecodeError
    ) -> None:
        self.path = path
        self.operation = operation
        detail = cause.strerror if isinstance(cause, OSError) else None
        msg = f"Failed to {operation} '{path}': {detail or cause}"
        super().__init__(msg)


class HighlighterError(LiterateError):
    """Raised when the external highlighter fails to start or exits non-zero."""

    def __init__(
        self,
        command: typ.Sequence[str],
        *,
        returncode: int | None = None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        detail = reason or f"exited with status {returncode}"
        msg = f"Highlighter '{' '.join(self.command)}' {detail}"
        if stderr.strip():
            msg = f"{msg}: {stderr.strip()}"
        super().__init__(msg)


__all__ = [
    "ConfigError",
    "HighlighterError",
    "LiterateError",
    "SourceIOError",
    "UnknownLanguageError",
]
