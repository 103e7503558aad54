"""High-level orchestration for literate documentation generation.

:class:`DocumentationGenerator` builds the sorted file index, writes the shared
stylesheet once, then runs the per-file pipeline (segment, highlight, compose,
render, write) for every source on a thread pool and waits for all of them.
The first failure cancels files that have not started yet and propagates, so
the run aborts; pages already written stay on disk.

Example
-------
>>> from pathlib import Path
>>> from literate_pages.config import LiterateConfig
>>> from literate_pages.generator import DocumentationGenerator
>>> generator = DocumentationGenerator(LiterateConfig(output_dir=Path("docs")))
>>> generator.run(["contracts/Token.sol"])  # doctest: +SKIP
[PosixPath('docs/Token.html')]
"""

from __future__ import annotations

import collections.abc as cabc
import concurrent.futures
import typing as typ
from pathlib import Path

from .composer import SectionComposer
from .errors import SourceIOError
from .highlight import (
    HighlightCoordinator,
    PygmentizeHighlighter,
    PygmentsHighlighter,
)
from .languages import LanguageRegistry, build_registry, new_sentinel
from .log import logger
from .page import PageData, PageRenderer, destination, page_title
from .renderer import HtmlContentRenderer
from .segmenter import segment

if typ.TYPE_CHECKING:
    from .config import LiterateConfig
    from .highlight import Highlighter


def registry_from_config(config: LiterateConfig) -> LanguageRegistry:
    """Build the immutable language registry for one run."""
    extra = {ext: (entry.name, entry.symbol) for ext, entry in config.languages.items()}
    return build_registry(extra, sentinel=new_sentinel(config.divider))


def highlighter_from_config(config: LiterateConfig) -> Highlighter:
    """Return the highlighter backend selected by ``config``."""
    if config.highlighter == "library":
        return PygmentsHighlighter()
    return PygmentizeHighlighter(config.highlighter_command)


class DocumentationGenerator:
    """Render literate HTML pages for a set of annotated source files."""

    def __init__(
        self,
        config: LiterateConfig,
        *,
        registry: LanguageRegistry | None = None,
        highlighter: Highlighter | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator and its shared, read-only collaborators.

        Parameters
        ----------
        config : LiterateConfig
            Resolved run configuration.
        registry : LanguageRegistry, optional
            Language registry; built from ``config`` when omitted.
        highlighter : Highlighter, optional
            Highlighter backend; selected from ``config`` when omitted.
        templates_dir : Path, optional
            Directory holding the page template and base stylesheet.
        """
        self.config = config
        self.registry = registry if registry is not None else registry_from_config(config)
        self.coordinator = HighlightCoordinator(
            highlighter if highlighter is not None else highlighter_from_config(config)
        )
        self.renderer = HtmlContentRenderer(config.pygments_style)
        self.composer = SectionComposer(self.renderer, tag_mode=config.tag_mode)
        self.page_renderer = PageRenderer(
            templates_dir=templates_dir, stylesheet=config.stylesheet
        )

    def run(self, sources: cabc.Iterable[str | Path]) -> list[Path]:
        """Generate one page per source and return the written paths.

        Parameters
        ----------
        sources : Iterable[str | Path]
            Source files to document; an empty iterable does nothing.

        Returns
        -------
        list[Path]
            Written page paths, ordered like the sorted file index.

        Raises
        ------
        LiterateError
            The first failure from any file; remaining work is cancelled.
        """
        index = sorted(str(source) for source in sources)
        if not index:
            return []

        out_dir = self.config.output_dir
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SourceIOError(out_dir, "create directory", exc) from exc
        self.write_stylesheet()

        written: dict[str, Path] = {}
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self.config.max_workers
        ) as executor:
            futures = {
                executor.submit(self.generate_file, source, index): source
                for source in index
            }
            try:
                for future in concurrent.futures.as_completed(futures):
                    written[futures[future]] = future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
        return [written[source] for source in index]

    def write_stylesheet(self) -> Path:
        """Write the shared stylesheet into the output directory."""
        path = self.config.output_dir / self.config.stylesheet
        css = f"{self.page_renderer.base_stylesheet()}\n{self.renderer.stylesheet}\n"
        try:
            path.write_text(css, encoding="utf-8")
        except OSError as exc:
            raise SourceIOError(path, "write", exc) from exc
        logger.debug("wrote stylesheet {path}", path=path)
        return path

    def generate_file(self, source: str, index: list[str]) -> Path:
        """Run the full pipeline for one source file.

        Parameters
        ----------
        source : str
            Path of the annotated source file.
        index : list[str]
            Sorted paths of every source in the run, for the table of contents.

        Returns
        -------
        Path
            Path of the written HTML page.
        """
        source_path = Path(source)
        language = self.registry.resolve(source_path.suffix)
        try:
            text = source_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceIOError(source_path, "read", exc) from exc
        except UnicodeDecodeError as exc:
            raise SourceIOError(source_path, "decode", exc) from exc

        sections = segment(text, language)
        logger.debug("{source}: {count} sections", source=source, count=len(sections))
        self.coordinator.highlight(sections, language)
        composed = self.composer.compose(sections)
        html = self.page_renderer.render(
            PageData(
                title=page_title(source_path),
                sections=composed,
                sources=index,
                multiple=len(index) > 1,
            )
        )

        dest = destination(source_path, self.config.output_dir)
        try:
            dest.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise SourceIOError(dest, "write", exc) from exc
        logger.info("{source} -> {dest}", source=source, dest=dest)
        return dest


__all__ = ["DocumentationGenerator", "highlighter_from_config", "registry_from_config"]
