"""Language registry mapping file extensions to highlighter settings.

Each :class:`Language` knows the Pygments lexer name, the comment prefix used
to recognise prose lines, and the synthetic divider that separates sections
while their code travels through the highlighter. The divider is a comment in
the source language, so the highlighter marks it up like any other comment;
``divider_html`` recovers it from that markup.

The registry is built once before any file is processed and is never mutated
afterwards, so it can be shared read-only by every worker.

Examples
--------
>>> from literate_pages.languages import build_registry
>>> registry = build_registry()
>>> registry.resolve(".sol").name
'solidity'
>>> registry.resolve(".sol").divider_text
'\\n///DIVIDER\\n'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import secrets
import typing as typ
from types import MappingProxyType

from pygments.formatters.html import escape_html

from ._constants import DIVIDER_WORD
from .errors import UnknownLanguageError

# extension -> (pygments lexer, comment symbol)
BUILTIN_LANGUAGES: dict[str, tuple[str, str]] = {
    ".sol": ("solidity", "///"),
    ".go": ("go", "//"),
    ".js": ("javascript", "//"),
    ".ts": ("typescript", "//"),
    ".rs": ("rust", "//"),
    ".c": ("c", "//"),
    ".py": ("python", "#"),
    ".rb": ("ruby", "#"),
    ".sh": ("bash", "#"),
}


@dc.dataclass(frozen=True, slots=True)
class Language:
    """Immutable description of one registered language.

    Attributes
    ----------
    extension : str
        File extension including the leading dot (``".sol"``).
    name : str
        Pygments lexer name handed to the highlighter.
    symbol : str
        Line comment prefix that marks prose.
    comment_matcher : re.Pattern[str]
        Matches the comment prefix plus one optional space at line start.
    divider_text : str
        Line inserted between sections in the highlighter input.
    divider_html : re.Pattern[str]
        Matches the highlighter's HTML rendering of ``divider_text``.
    """

    extension: str
    name: str
    symbol: str
    comment_matcher: re.Pattern[str]
    divider_text: str
    divider_html: re.Pattern[str]

    @classmethod
    def create(
        cls, extension: str, name: str, symbol: str, *, sentinel: str = DIVIDER_WORD
    ) -> Language:
        """Derive the matchers and divider for ``symbol`` and build a Language."""
        if not symbol:
            msg = f"Language for '{extension}' needs a non-empty comment symbol."
            raise ValueError(msg)
        encoded = re.escape(escape_html(symbol + sentinel))
        return cls(
            extension=extension,
            name=name,
            symbol=symbol,
            comment_matcher=re.compile(rf"^\s*{re.escape(symbol)}\s?"),
            divider_text=f"\n{symbol}{sentinel}\n",
            divider_html=re.compile(rf'\n*<span class="c1?">{encoded}</span>\n*'),
        )

    def is_comment(self, line: str) -> bool:
        """Return True when ``line`` is a prose comment line."""
        return self.comment_matcher.match(line) is not None

    def strip_comment(self, line: str) -> str:
        """Remove the comment prefix (and one following space) from ``line``."""
        return self.comment_matcher.sub("", line, count=1)


class LanguageRegistry(cabc.Mapping[str, Language]):
    """Read-only mapping of extensions to :class:`Language` entries."""

    def __init__(self, languages: cabc.Iterable[Language]) -> None:
        entries = {language.extension: language for language in languages}
        self._languages: cabc.Mapping[str, Language] = MappingProxyType(entries)

    def __getitem__(self, extension: str) -> Language:
        return self._languages[extension]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)

    def resolve(self, extension: str) -> Language:
        """Return the language for ``extension``.

        Raises
        ------
        UnknownLanguageError
            If no language is registered; there is no plain-text fallback.
        """
        try:
            return self._languages[extension]
        except KeyError:
            raise UnknownLanguageError(extension, self._languages) from None


def new_sentinel(mode: str) -> str:
    """Return the divider sentinel for ``mode`` (``"fixed"`` or ``"random"``).

    Random sentinels are generated once per run so a source file is very
    unlikely to contain one by accident.
    """
    match mode:
        case "fixed":
            return DIVIDER_WORD
        case "random":
            return f"{DIVIDER_WORD}{secrets.token_hex(8)}"
        case _:
            msg = f"Unknown divider mode '{mode}'; expected 'fixed' or 'random'."
            raise ValueError(msg)


def build_registry(
    extra: typ.Mapping[str, tuple[str, str]] | None = None,
    *,
    sentinel: str = DIVIDER_WORD,
) -> LanguageRegistry:
    """Build the registry from the built-in table plus ``extra`` overrides.

    Parameters
    ----------
    extra : Mapping[str, tuple[str, str]], optional
        Additional ``extension -> (lexer name, comment symbol)`` entries;
        they replace built-ins with the same extension.
    sentinel : str, optional
        Divider word used by every language in this registry.
    """
    table = dict(BUILTIN_LANGUAGES)
    if extra:
        table.update(extra)
    return LanguageRegistry(
        Language.create(extension, name, symbol, sentinel=sentinel)
        for extension, (name, symbol) in table.items()
    )


__all__ = [
    "BUILTIN_LANGUAGES",
    "Language",
    "LanguageRegistry",
    "build_registry",
    "new_sentinel",
]
