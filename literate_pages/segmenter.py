r"""Split annotated source into ordered prose/code sections.

A new :class:`Section` starts whenever a comment line follows code, so each
section holds a run of prose followed by the code it describes. Prose can span
several comment runs before any code appears; only the comment-after-code
transition closes a section. End of input always closes the final section, so
every input (including an empty file) yields at least one.

Example
-------
>>> from literate_pages.languages import build_registry
>>> from literate_pages.segmenter import segment
>>> sol = build_registry().resolve(".sol")
>>> sections = segment("/// Adds\nfunction add()\n", sol)
>>> sections[0].docs_text, sections[0].first_code_line
('Adds\n', 'function add()')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .languages import Language


@dc.dataclass(slots=True)
class Section:
    """A contiguous run of prose and the code that follows it.

    Attributes
    ----------
    docs_text : str
        Comment lines with the prefix stripped, each newline-terminated.
    code_text : str
        Code lines verbatim, each newline-terminated; empty for a trailing
        prose-only section.
    first_code_line : str
        First code line of the section, used for tag and identifier
        derivation; empty when the section has no code.
    source_lines : tuple[str, ...]
        Raw lines of the section in file order, before prefix stripping.
    docs_html : str or None
        Rendered prose, filled in by the composer.
    code_html : str or None
        Highlighted code, filled in by the highlight coordinator.
    """

    docs_text: str
    code_text: str
    first_code_line: str
    source_lines: tuple[str, ...] = ()
    docs_html: str | None = None
    code_html: str | None = None


def split_lines(source: str) -> list[str]:
    """Split ``source`` on newlines; a final newline does not add an empty line."""
    if not source:
        return []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class _Accumulator:
    """Collect the lines of the section currently being built."""

    def __init__(self) -> None:
        self.docs: list[str] = []
        self.code: list[str] = []
        self.raw: list[str] = []
        self.first_code_line = ""

    def build(self) -> Section:
        return Section(
            docs_text="".join(f"{line}\n" for line in self.docs),
            code_text="".join(f"{line}\n" for line in self.code),
            first_code_line=self.first_code_line,
            source_lines=tuple(self.raw),
        )


def segment(source: str, language: Language) -> list[Section]:
    """Split ``source`` into sections using ``language``'s comment prefix.

    Parameters
    ----------
    source : str
        Full text of the annotated source file.
    language : Language
        Registry entry whose comment matcher identifies prose lines.

    Returns
    -------
    list[Section]
        Sections in file order; never empty.
    """
    sections: list[Section] = []
    current = _Accumulator()
    in_code = False
    for line in split_lines(source):
        if language.is_comment(line):
            if in_code:
                sections.append(current.build())
                current = _Accumulator()
                in_code = False
            current.docs.append(language.strip_comment(line))
        else:
            if not in_code:
                current.first_code_line = line
            in_code = True
            current.code.append(line)
        current.raw.append(line)
    sections.append(current.build())
    return sections


__all__ = ["Section", "segment", "split_lines"]
