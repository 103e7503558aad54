r"""Compose highlighted sections into the triples handed to the page template.

For every :class:`~literate_pages.segmenter.Section` the composer renders the
prose through Markdown, links ``@@name`` references to ``#section-name``
anchors, bolds the section's own identifier where it stands alone in the
prose, derives the section's anchor tag, and drops the code column for
``pragma``/``import`` preambles.

Example
-------
>>> from literate_pages.composer import section_identifier, section_tag
>>> section_tag(3, "function add(a, b)")
'3'
>>> section_tag(1, "dev Foo bar")
'Foo'
>>> section_identifier("function add(a, b)")
'function'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from ._constants import (
    DECLARATION_KEYWORDS,
    SECTION_ANCHOR_PREFIX,
    SUPPRESSED_CODE_PREFIXES,
)
from .log import logger

if typ.TYPE_CHECKING:
    from .renderer import HtmlContentRenderer
    from .segmenter import Section

REFERENCE_PATTERN = re.compile(r"@@(\w+)")
REFERENCE_TEMPLATE = (
    rf'<a href="#{SECTION_ANCHOR_PREFIX}\1" title="Jump to \1">\1</a>'
)
TAG_SPLIT_PATTERN = re.compile(r"(<[^>]*>)")
TAG_MODES = ("preserve", "dedupe")


@dc.dataclass(frozen=True, slots=True)
class ComposedSection:
    """One row of the rendered page.

    Attributes
    ----------
    docs_html : str
        Rendered prose with references linked and the identifier emphasised.
    code_html : str
        Highlighted code, or ``""`` for suppressed preambles.
    tag : str
        Anchor name for the section (``section-<tag>`` in the page).
    """

    docs_html: str
    code_html: str
    tag: str


def is_declaration(first_code_line: str) -> bool:
    """Return True when the line starts with a declaration keyword."""
    return first_code_line.startswith(DECLARATION_KEYWORDS)


def section_tag(index: int, first_code_line: str) -> str:
    """Return the anchor tag for the section at 1-based ``index``.

    Declarations are tagged with their second token; everything else, and a
    declaration keyword with nothing after it, is tagged with its ordinal.
    """
    tokens = first_code_line.split()
    if is_declaration(first_code_line) and len(tokens) > 1:
        return tokens[1]
    return str(index)


def section_identifier(first_code_line: str) -> str:
    """Return the identifier to emphasise in the section's prose."""
    tokens = first_code_line.split()
    if is_declaration(first_code_line):
        return tokens[1] if len(tokens) > 1 else ""
    return tokens[0] if tokens else ""


def link_references(html: str) -> str:
    """Replace every ``@@name`` with a link to ``#section-name``."""
    return REFERENCE_PATTERN.sub(REFERENCE_TEMPLATE, html)


def _emphasis_passes(identifier: str) -> list[re.Pattern[str]]:
    escaped = re.escape(identifier)
    return [
        re.compile(rf"(?<=\s){escaped}(?=\s)"),
        re.compile(rf"(?<=\s){escaped}(?!\w)"),
        re.compile(rf"(?<!\w){escaped}(?=\s)"),
    ]


def emphasize_identifier(html: str, identifier: str) -> str:
    """Wrap standalone occurrences of ``identifier`` in ``<strong>``.

    Only text between tags is searched. An occurrence needs whitespace on at
    least one side and no word character on the other; once wrapped it sits
    between ``>`` and ``<`` and no later pass can match it again.
    """
    if not identifier or identifier not in html:
        return html
    passes = _emphasis_passes(identifier)
    chunks = TAG_SPLIT_PATTERN.split(html)
    # Odd indices hold the captured tags.
    for idx in range(0, len(chunks), 2):
        text = chunks[idx]
        if identifier not in text:
            continue
        for pattern in passes:
            text = pattern.sub(lambda m: f"<strong>{m.group(0)}</strong>", text)
        chunks[idx] = text
    return "".join(chunks)


def is_suppressed(code_text: str) -> bool:
    """Return True when the code column should be left empty."""
    return code_text.startswith(SUPPRESSED_CODE_PREFIXES)


def _unique_tag(base: str, used: set[str]) -> str:
    """Generate a unique tag, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


class SectionComposer:
    """Turn highlighted sections into :class:`ComposedSection` triples."""

    def __init__(
        self, renderer: HtmlContentRenderer, *, tag_mode: str = "preserve"
    ) -> None:
        """Initialize the composer.

        Parameters
        ----------
        renderer : HtmlContentRenderer
            Markdown renderer applied to each section's prose in isolation.
        tag_mode : str, optional
            ``"preserve"`` keeps duplicate tags as derived; ``"dedupe"``
            suffixes repeated tags with ``-2``, ``-3``, and so on.
        """
        if tag_mode not in TAG_MODES:
            msg = f"Unknown tag mode '{tag_mode}'; expected one of {', '.join(TAG_MODES)}."
            raise ValueError(msg)
        self.renderer = renderer
        self.tag_mode = tag_mode

    def compose_one(self, index: int, section: Section) -> ComposedSection:
        """Compose the section at 1-based ``index``."""
        docs_html = self.renderer.markdown(section.docs_text)
        section.docs_html = docs_html
        docs_html = link_references(docs_html)
        docs_html = emphasize_identifier(
            docs_html, section_identifier(section.first_code_line)
        )
        code_html = "" if is_suppressed(section.code_text) else section.code_html or ""
        return ComposedSection(
            docs_html=docs_html,
            code_html=code_html,
            tag=section_tag(index, section.first_code_line),
        )

    def compose(self, sections: cabc.Iterable[Section]) -> list[ComposedSection]:
        """Compose every section in order."""
        composed = [
            self.compose_one(index, section)
            for index, section in enumerate(sections, start=1)
        ]
        if self.tag_mode == "dedupe":
            used: set[str] = set()
            composed = [
                dc.replace(item, tag=_unique_tag(item.tag, used)) for item in composed
            ]
        logger.debug("composed {count} sections", count=len(composed))
        return composed


__all__ = [
    "ComposedSection",
    "REFERENCE_PATTERN",
    "SectionComposer",
    "TAG_MODES",
    "emphasize_identifier",
    "is_declaration",
    "is_suppressed",
    "link_references",
    "section_identifier",
    "section_tag",
]
