"""Typed dataclasses describing literate_pages configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import (
    DEFAULT_HIGHLIGHTER_COMMAND,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_STYLESHEET,
)

HIGHLIGHTER_BACKENDS = ("process", "library")
DIVIDER_MODES = ("fixed", "random")


@dc.dataclass(frozen=True, slots=True)
class LanguageConfig:
    """A language entry added to, or overriding, the built-in registry."""

    name: str
    symbol: str


@dc.dataclass(frozen=True, slots=True)
class LiterateConfig:
    """Resolved settings for one documentation run.

    Attributes
    ----------
    output_dir : Path
        Directory receiving the HTML pages and the stylesheet.
    stylesheet : str
        File name of the shared stylesheet.
    pygments_style : str
        Pygments style used for the stylesheet and fenced prose code.
    highlighter : str
        ``"process"`` runs ``highlighter_command``; ``"library"`` highlights
        in-process with Pygments.
    highlighter_command : str
        Executable used by the process backend.
    divider : str
        ``"fixed"`` uses the literal ``DIVIDER`` sentinel; ``"random"``
        appends a per-run random token.
    tag_mode : str
        ``"preserve"`` or ``"dedupe"`` section tags.
    max_workers : int or None
        Upper bound on files processed concurrently; ``None`` lets the
        executor decide.
    languages : dict[str, LanguageConfig]
        Extra registry entries keyed by extension.
    """

    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    stylesheet: str = DEFAULT_STYLESHEET
    pygments_style: str = "default"
    highlighter: str = "process"
    highlighter_command: str = DEFAULT_HIGHLIGHTER_COMMAND
    divider: str = "fixed"
    tag_mode: str = "preserve"
    max_workers: int | None = None
    languages: dict[str, LanguageConfig] = dc.field(default_factory=dict)

    def with_overrides(self, **overrides: object) -> LiterateConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dc.replace(self, **changes)


__all__ = [
    "DIVIDER_MODES",
    "HIGHLIGHTER_BACKENDS",
    "LanguageConfig",
    "LiterateConfig",
]
