"""Literate page rendering.

This module turns the composed sections of one source file into the final
HTML page. :class:`PageRenderer` loads ``literate_page.jinja`` from the package
templates with autoescape enabled; section HTML is inserted as markup, while
titles and file names are escaped. The table of contents is only rendered
when more than one source file is documented in the same run.

Typical usage mirrors the generator:

>>> from literate_pages.page import PageData, PageRenderer
>>> renderer = PageRenderer()
>>> html = renderer.render(PageData("token", [], ["token.sol"], False))
>>> "<title>token</title>" in html
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import DEFAULT_STYLESHEET, TITLE_STRIP_PREFIX

if typ.TYPE_CHECKING:
    from .composer import ComposedSection


@dc.dataclass(slots=True)
class PageData:
    """Everything the page template needs for one source file.

    Attributes
    ----------
    title : str
        Page title derived from the source file name.
    sections : list[ComposedSection]
        Composed sections in file order.
    sources : list[str]
        Sorted paths of every source file in the run.
    multiple : bool
        Whether a table of contents should be rendered.
    """

    title: str
    sections: list[ComposedSection]
    sources: list[str]
    multiple: bool


def page_title(source: str | Path) -> str:
    """Return the file's base name without extension or ``docs_`` prefix."""
    return Path(source).stem.removeprefix(TITLE_STRIP_PREFIX)


def destination(source: str | Path, output_dir: Path) -> Path:
    """Return ``<output_dir>/<basename-without-extension>.html``."""
    return output_dir / f"{Path(source).stem}.html"


def toc_destination(source: str | Path) -> str:
    """Return the relative link used by the table of contents."""
    return f"{Path(source).stem}.html"


class PageRenderer:
    """Render :class:`PageData` through the literate page template."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        stylesheet: str = DEFAULT_STYLESHEET,
    ) -> None:
        """Initialize the Jinja environment and load the page template.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``literate_page.jinja``; defaults to the
            package templates.
        stylesheet : str, optional
            File name of the shared stylesheet linked from every page.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.stylesheet = stylesheet
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["page_title"] = page_title
        self.env.filters["destination"] = toc_destination
        self.template = self.env.get_template("literate_page.jinja")

    def render(self, data: PageData) -> str:
        """Return the page HTML for ``data``."""
        return self.template.render(
            title=data.title,
            sections=data.sections,
            sources=data.sources,
            multiple=data.multiple,
            stylesheet=self.stylesheet,
        )

    def base_stylesheet(self) -> str:
        """Return the layout CSS shipped next to the template."""
        return (self.templates_dir / "literate.css").read_text(encoding="utf-8")


__all__ = ["PageData", "PageRenderer", "destination", "page_title", "toc_destination"]
