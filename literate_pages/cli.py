"""Cyclopts CLI entrypoint for rendering literate documentation pages.

The ``literate`` console script renders every named source file into
``docs/<name>.html`` alongside a shared stylesheet. Options fall back to the
optional ``literate.yaml`` configuration and to ``LITERATE_*`` environment
variables.

Examples
--------
Render two contracts with a table of contents linking them:

>>> from literate_pages.cli import main
>>> main(["generate", "Token.sol", "Vault.sol"])  # doctest: +SKIP

List the registered languages:

>>> main(["languages"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from . import log
from .config import load_config
from .errors import LiterateError
from .generator import DocumentationGenerator, registry_from_config
from .log import logger

app = App(name="literate", config=cyclopts.config.Env("LITERATE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _set_verbosity(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        log.filter.level = "DEBUG"
    elif quiet:
        log.filter.level = "WARNING"


@app.default
@app.command(help="Render literate HTML pages from annotated source files.")
def generate(
    *sources: Path,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to literate.yaml")
    ] = None,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    tag_mode: typ.Annotated[
        typ.Literal["preserve", "dedupe"] | None,
        Parameter(help="Keep duplicate section tags or suffix them"),
    ] = None,
    highlighter: typ.Annotated[
        typ.Literal["process", "library"] | None,
        Parameter(help="Run pygmentize or highlight in-process"),
    ] = None,
    divider: typ.Annotated[
        typ.Literal["fixed", "random"] | None,
        Parameter(help="Section divider sentinel"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log every pipeline stage")] = False,
    quiet: typ.Annotated[bool, Parameter(help="Only log warnings and errors")] = False,
) -> None:
    """Generate one HTML page per source file.

    Parameters
    ----------
    *sources : Path
        Annotated source files; each extension must be registered.
    config : Path or None, optional
        Configuration file; ``literate.yaml`` is used when present.
    output_dir : Path or None, optional
        Output directory override (default ``docs``).
    tag_mode : str or None, optional
        ``preserve`` or ``dedupe`` section tags.
    highlighter : str or None, optional
        ``process`` or ``library`` highlighter backend.
    divider : str or None, optional
        ``fixed`` or ``random`` divider sentinel.
    verbose : bool, optional
        Lower the log level to ``DEBUG``.
    quiet : bool, optional
        Raise the log level to ``WARNING``.

    Raises
    ------
    LiterateError
        If any file fails; the run stops at the first failure.
    """
    _set_verbosity(verbose=verbose, quiet=quiet)
    if not sources:
        logger.warning("no source files given; nothing to do")
        return
    settings = load_config(config).with_overrides(
        output_dir=output_dir,
        tag_mode=tag_mode,
        highlighter=highlighter,
        divider=divider,
    )
    written = DocumentationGenerator(settings).run(sources)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="List the registered source languages.")
def languages(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to literate.yaml")
    ] = None,
) -> None:
    """Print each registered extension with its lexer and comment symbol."""
    registry = registry_from_config(load_config(config))
    for extension in sorted(registry):
        language = registry[extension]
        print(f"{extension}\t{language.name}\t{language.symbol}")


def main(tokens: typ.Sequence[str] | None = None) -> None:
    """Invoke the Cyclopts application behind the ``literate`` console command.

    Parameters
    ----------
    tokens : Sequence[str], optional
        Arguments to parse instead of ``sys.argv``.

    Raises
    ------
    SystemExit
        With status 1 when the run fails with a :class:`LiterateError`.
    """
    try:
        app(tokens)
    except LiterateError as exc:
        logger.error("{error}", error=exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
