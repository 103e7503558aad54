"""End-to-end tests for the documentation generator.

The generator runs the whole pipeline (segment, highlight, compose, render,
write) for every source on a thread pool. These tests use the in-process
Pygments backend so no ``pygmentize`` executable is required, and inspect the
written pages with BeautifulSoup.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from literate_pages.config import LiterateConfig
from literate_pages.errors import SourceIOError, UnknownLanguageError
from literate_pages.generator import (
    DocumentationGenerator,
    highlighter_from_config,
    registry_from_config,
)
from literate_pages.highlight import PygmentizeHighlighter, PygmentsHighlighter

TOKEN_SOURCE = (
    "pragma solidity ^0.8.0;\n"
    "/// notice Token keeps balances; see @@Vault.\n"
    "contract Token {\n"
    "    uint256 total;\n"
    "/// The total supply is tracked in total.\n"
    "total += 1;\n"
)
VAULT_SOURCE = "/// Holds balances for @@Token.\ndev Vault holds tokens\n"

Writer = typ.Callable[[dict[str, str]], list[str]]


@pytest.fixture
def config(tmp_path: Path) -> LiterateConfig:
    """Return a configuration writing into a temp directory in-process."""
    return LiterateConfig(output_dir=tmp_path / "docs", highlighter="library")


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_run_writes_pages_and_stylesheet(config: LiterateConfig, write_sources: Writer) -> None:
    sources = write_sources({"Vault.sol": VAULT_SOURCE, "Token.sol": TOKEN_SOURCE})
    written = DocumentationGenerator(config).run(sources)
    assert [p.name for p in written] == ["Token.html", "Vault.html"]
    assert all(p.parent == config.output_dir for p in written)
    css = (config.output_dir / "literate.css").read_text(encoding="utf-8")
    assert "#container" in css
    assert ".highlight" in css


def test_page_sections_tags_and_suppression(
    config: LiterateConfig, write_sources: Writer
) -> None:
    sources = write_sources({"Token.sol": TOKEN_SOURCE})
    [page] = DocumentationGenerator(config).run(sources)
    soup = _soup(page)
    rows = soup.select("tbody tr")
    assert [row["id"] for row in rows] == ["section-1", "section-2", "section-3"]
    assert rows[0].select_one("td.code").get_text(strip=True) == ""
    assert "contract" in rows[1].select_one("td.code").get_text()
    assert "total" in rows[2].select_one("td.code").get_text()
    link = rows[1].select_one("td.docs a[href='#section-Vault']")
    assert link is not None
    assert link.get_text() == "Vault"
    assert [s.get_text() for s in rows[2].select("td.docs strong")] == ["total", "total"]
    assert soup.select_one("#jump_to") is None
    assert soup.title.get_text() == "Token"


def test_table_of_contents_lists_every_source(
    config: LiterateConfig, write_sources: Writer
) -> None:
    sources = write_sources({"Token.sol": TOKEN_SOURCE, "Vault.sol": VAULT_SOURCE})
    written = DocumentationGenerator(config).run(sources)
    for page in written:
        hrefs = [a["href"] for a in _soup(page).select("#jump_page a.source")]
        assert hrefs == ["Token.html", "Vault.html"]
    vault_rows = _soup(written[1]).select("tbody tr")
    assert [row["id"] for row in vault_rows] == ["section-Vault"]


def test_empty_source_renders_single_section(
    config: LiterateConfig, write_sources: Writer
) -> None:
    [page] = DocumentationGenerator(config).run(write_sources({"Empty.sol": ""}))
    assert len(_soup(page).select("tbody tr")) == 1


def test_no_sources_writes_nothing(config: LiterateConfig) -> None:
    assert DocumentationGenerator(config).run([]) == []
    assert not config.output_dir.exists()


def test_unknown_extension_aborts_run(config: LiterateConfig, write_sources: Writer) -> None:
    sources = write_sources({"notes.txt": "hello\n"})
    with pytest.raises(UnknownLanguageError):
        DocumentationGenerator(config).run(sources)


def test_unreadable_source_aborts_run(config: LiterateConfig, tmp_path: Path) -> None:
    with pytest.raises(SourceIOError, match="read") as excinfo:
        DocumentationGenerator(config).run([tmp_path / "Missing.sol"])
    assert excinfo.value.operation == "read"


def test_undecodable_source_names_file(config: LiterateConfig, tmp_path: Path) -> None:
    source = tmp_path / "Latin.sol"
    source.write_bytes(b"/// caf\xe9\nuint a;\n")
    with pytest.raises(SourceIOError, match="Latin.sol") as excinfo:
        DocumentationGenerator(config).run([source])
    assert excinfo.value.operation == "decode"
    assert excinfo.value.path == source


def test_failure_keeps_pages_already_written(
    config: LiterateConfig, write_sources: Writer
) -> None:
    sources = write_sources({"Token.sol": TOKEN_SOURCE, "zz.txt": "x\n"})
    generator = DocumentationGenerator(config.with_overrides(max_workers=1))
    with pytest.raises(UnknownLanguageError):
        generator.run(sources)
    assert (config.output_dir / "Token.html").exists()


def test_highlighter_failure_propagates(
    config: LiterateConfig, write_sources: Writer
) -> None:
    from literate_pages.errors import HighlighterError

    def broken(code: str, language: typ.Any) -> str:
        raise HighlighterError(["fake"], returncode=1)

    sources = write_sources({"Token.sol": TOKEN_SOURCE})
    with pytest.raises(HighlighterError):
        DocumentationGenerator(config, highlighter=broken).run(sources)


def test_custom_language_from_config(tmp_path: Path, write_sources: Writer) -> None:
    from literate_pages.config import LanguageConfig

    config = LiterateConfig(
        output_dir=tmp_path / "docs",
        highlighter="library",
        languages={".vy": LanguageConfig(name="python", symbol="#")},
    )
    sources = write_sources({"Pool.vy": "# Pool state\nbalance: uint256\n"})
    [page] = DocumentationGenerator(config).run(sources)
    assert "Pool state" in _soup(page).select_one("td.docs").get_text()


def test_backend_selection() -> None:
    assert isinstance(highlighter_from_config(LiterateConfig()), PygmentizeHighlighter)
    assert isinstance(
        highlighter_from_config(LiterateConfig(highlighter="library")), PygmentsHighlighter
    )


def test_random_divider_registry() -> None:
    registry = registry_from_config(LiterateConfig(divider="random"))
    assert registry.resolve(".sol").divider_text != "\n///DIVIDER\n"
