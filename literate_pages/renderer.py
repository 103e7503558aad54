"""Render section prose as Markdown and expose the highlight stylesheet."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter
from pygments.util import ClassNotFound

from .errors import ConfigError

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

HIGHLIGHT_CSS_CLASS = "highlight"
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)


class HtmlContentRenderer:
    """Render Markdown prose with the same highlight styling as the code column."""

    def __init__(
        self,
        pygments_style: str = "default",
        extensions: typ.Sequence[Extension | str] | None = None,
    ) -> None:
        """Initialize a renderer with a Pygments style and extra extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for the stylesheet and for fenced
            code inside prose. Defaults to ``"default"``.
        extensions : Sequence[Extension | str], optional
            Markdown extensions appended to the built-in set.

        Raises
        ------
        ConfigError
            If ``pygments_style`` is not a known Pygments style.
        """
        self.pygments_style = pygments_style
        try:
            self._formatter = HtmlFormatter(
                style=pygments_style, cssclass=HIGHLIGHT_CSS_CLASS
            )
        except ClassNotFound as exc:
            msg = f"Unknown Pygments style '{pygments_style}'."
            raise ConfigError(msg) from exc
        self._extra_extensions = list(extensions or [])

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")

    def markdown(self, text: str) -> str:
        """Render ``text`` in isolation; blank prose renders to ``""``."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": HIGHLIGHT_CSS_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Unindent fences left indented after the comment prefix is stripped."""
        return FENCED_INDENT_PATTERN.sub(r"\1", text)


__all__ = ["HIGHLIGHT_CSS_CLASS", "HtmlContentRenderer"]
