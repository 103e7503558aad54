"""Highlight every section's code through a single highlighter pass.

The highlighter is a black box that turns one source stream into one HTML
document and knows nothing about sections. :class:`HighlightCoordinator`
joins the sections' code with a divider comment, runs the highlighter once,
strips the document wrapper, and cuts the result back into one fragment per
section wherever the highlighted divider appears.

Two backends are provided: :class:`PygmentizeHighlighter` pipes the stream
through the ``pygmentize`` executable, and :class:`PygmentsHighlighter`
produces the same markup in-process with the Pygments library.

Example
-------
>>> from literate_pages.highlight import HighlightCoordinator, PygmentsHighlighter
>>> from literate_pages.languages import build_registry
>>> from literate_pages.segmenter import segment
>>> sol = build_registry().resolve(".sol")
>>> sections = segment("uint a;\\n/// b\\nuint b;\\n", sol)
>>> coordinator = HighlightCoordinator(PygmentsHighlighter())
>>> [s.code_html.startswith('<div class="highlight">') for s in coordinator.highlight(sections, sol)]
[True, True]
"""

from __future__ import annotations

import subprocess
import typing as typ

from pygments import highlight as pygments_highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ._constants import DEFAULT_HIGHLIGHTER_COMMAND, HIGHLIGHT_END, HIGHLIGHT_START
from .errors import HighlighterError
from .log import logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .languages import Language
    from .segmenter import Section


class Highlighter(typ.Protocol):
    """Callable that turns a whole source stream into one HTML document."""

    def __call__(self, code: str, language: Language) -> str: ...


class PygmentizeHighlighter:
    """Run the ``pygmentize`` executable over standard input and output."""

    def __init__(self, executable: str = DEFAULT_HIGHLIGHTER_COMMAND) -> None:
        self.executable = executable

    def command(self, language: Language) -> list[str]:
        """Return the argument vector used for ``language``."""
        return [self.executable, "-l", language.name, "-f", "html", "-O", "encoding=utf-8"]

    def __call__(self, code: str, language: Language) -> str:
        """Feed ``code`` to the process and return its complete output.

        Raises
        ------
        HighlighterError
            If the process cannot be started, a stream fails, or it exits
            with a non-zero status.
        """
        args = self.command(language)
        logger.debug("running {command}", command=" ".join(args))
        try:
            # run() starts the process, then feeds stdin while draining stdout.
            result = subprocess.run(  # noqa: S603 - argv built from registry entries
                args,
                input=code.encode("utf-8"),
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            raise HighlighterError(
                args,
                returncode=exc.returncode,
                stderr=(exc.stderr or b"").decode("utf-8", errors="replace"),
            ) from exc
        except OSError as exc:
            raise HighlighterError(args, reason=f"could not run: {exc}") from exc
        return result.stdout.decode("utf-8")


class PygmentsHighlighter:
    """Produce ``pygmentize``-equivalent markup in-process."""

    def __init__(self) -> None:
        self._formatter = HtmlFormatter()

    def __call__(self, code: str, language: Language) -> str:
        """Highlight ``code`` with the lexer named by ``language``."""
        try:
            lexer = get_lexer_by_name(language.name)
        except ClassNotFound as exc:
            raise HighlighterError(
                ["pygments", language.name], reason="has no such lexer"
            ) from exc
        return pygments_highlight(code, lexer, self._formatter)


def build_stream(sections: cabc.Sequence[Section], language: Language) -> str:
    """Join the sections' code with a divider between consecutive sections."""
    return language.divider_text.join(section.code_text for section in sections)


def strip_wrapper(html: str) -> str:
    """Remove every occurrence of the highlighter's document wrapper."""
    return html.replace(HIGHLIGHT_START, "").replace(HIGHLIGHT_END, "")


def wrap_fragment(fragment: str) -> str:
    """Restore the wrapper so a fragment is standalone markup."""
    return f"{HIGHLIGHT_START}{fragment}{HIGHLIGHT_END}"


def split_fragments(html: str, language: Language, count: int) -> list[str]:
    """Cut highlighted ``html`` into ``count`` wrapped fragments.

    Parameters
    ----------
    html : str
        Highlighter output for the whole stream, wrapper included.
    language : Language
        Supplies the pattern of the highlighted divider.
    count : int
        Number of sections that went into the stream.

    Returns
    -------
    list[str]
        One fragment per section, in input order. When fewer dividers are
        found than expected, the remainder of the buffer goes to the current
        section and the following sections receive empty fragments.
    """
    remaining = strip_wrapper(html)
    fragments: list[str] = []
    for _ in range(count):
        match = language.divider_html.search(remaining)
        if match is None:
            fragments.append(wrap_fragment(remaining))
            remaining = ""
            continue
        fragments.append(wrap_fragment(remaining[: match.start()]))
        remaining = remaining[match.end() :]
    return fragments


class HighlightCoordinator:
    """Highlight a file's sections with one highlighter invocation."""

    def __init__(self, highlighter: Highlighter) -> None:
        self.highlighter = highlighter

    def highlight(
        self, sections: cabc.Sequence[Section], language: Language
    ) -> cabc.Sequence[Section]:
        """Populate ``code_html`` on every section and return the sections.

        Parameters
        ----------
        sections : Sequence[Section]
            Sections produced by :func:`literate_pages.segmenter.segment`.
        language : Language
            Language of the file; selects the lexer and the divider.

        Returns
        -------
        Sequence[Section]
            The same sections, with ``code_html`` set in order.
        """
        stream = build_stream(sections, language)
        output = self.highlighter(stream, language)
        fragments = split_fragments(output, language, len(sections))
        for section, fragment in zip(sections, fragments, strict=True):
            section.code_html = fragment
        logger.debug(
            "highlighted {count} sections as {name}",
            count=len(sections),
            name=language.name,
        )
        return sections


__all__ = [
    "HighlightCoordinator",
    "Highlighter",
    "PygmentizeHighlighter",
    "PygmentsHighlighter",
    "build_stream",
    "split_fragments",
    "strip_wrapper",
    "wrap_fragment",
]
