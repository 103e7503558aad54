"""Shared fixtures for the literate_pages test suite."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from literate_pages._constants import HIGHLIGHT_END, HIGHLIGHT_START
from literate_pages.languages import Language, LanguageRegistry, build_registry

SAMPLE_SOURCE = (
    "/// notice Adds two numbers\n"
    "/// params a, b\n"
    "function add(a, b)\n"
    "/// dev uses add\n"
    "/// params x, y\n"
    "function helper(x, y)"
)


@pytest.fixture
def registry() -> LanguageRegistry:
    """Return a registry using the fixed ``DIVIDER`` sentinel."""
    return build_registry()


@pytest.fixture
def solidity(registry: LanguageRegistry) -> Language:
    """Return the Solidity language entry (``///`` comments)."""
    return registry.resolve(".sol")


class EchoHighlighter:
    """Fake highlighter that marks up dividers the way Pygments does."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, code: str, language: Language) -> str:
        self.calls.append(code)
        divider = language.divider_text.strip("\n")
        body = code.replace(
            language.divider_text, f'\n<span class="c1">{divider}</span>\n'
        )
        return f"{HIGHLIGHT_START}{body}{HIGHLIGHT_END}\n"


@pytest.fixture
def echo_highlighter() -> EchoHighlighter:
    """Return a recording highlighter that needs no external process."""
    return EchoHighlighter()


@pytest.fixture
def sample_source() -> str:
    """Return the two-section Solidity example."""
    return SAMPLE_SOURCE


@pytest.fixture
def write_sources(tmp_path: Path) -> typ.Callable[[dict[str, str]], list[str]]:
    """Return a helper writing source files under ``tmp_path/src``."""
    root = tmp_path / "src"
    root.mkdir()

    def _write(files: dict[str, str]) -> list[str]:
        paths: list[str] = []
        for name, text in files.items():
            path = root / name
            path.write_text(text, encoding="utf-8")
            paths.append(str(path))
        return paths

    return _write
