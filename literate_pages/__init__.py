"""Render annotated source files as literate HTML documentation.

Prose comments become Markdown-rendered narrative next to the code they
describe, code is highlighted by Pygments, and ``@@name`` references link to
the matching section anchors.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``DocumentationGenerator``: Programmatic entry point for a run.

Examples
--------
>>> from literate_pages import main
>>> main(["generate", "Token.sol"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .generator import DocumentationGenerator

__all__ = ["DocumentationGenerator", "app", "main"]
