"""Tests for the ``literate`` command line."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from literate_pages import cli, log

Writer = typ.Callable[[dict[str, str]], list[str]]


@pytest.fixture(autouse=True)
def _restore_log_level() -> typ.Iterator[None]:
    level = log.filter.level
    yield
    log.filter.level = level


def test_generate_writes_pages(
    tmp_path: Path,
    write_sources: Writer,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    [source] = write_sources({"Token.sol": "/// A token\ncontract Token {}\n"})
    cli.generate(Path(source), output_dir=tmp_path / "out", highlighter="library")
    assert (tmp_path / "out" / "Token.html").exists()
    assert (tmp_path / "out" / "literate.css").exists()
    assert "wrote out/Token.html" in capsys.readouterr().out


def test_generate_without_sources_is_a_no_op(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    cli.generate()
    assert not (tmp_path / "docs").exists()


def test_generate_reads_config_file(
    tmp_path: Path, write_sources: Writer, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "site.yaml"
    config.write_text(
        "defaults:\n  output_dir: site\n  highlighter: library\n  stylesheet: s.css\n",
        encoding="utf-8",
    )
    [source] = write_sources({"Token.sol": "contract Token {}\n"})
    cli.generate(Path(source), config=config)
    assert (tmp_path / "site" / "Token.html").exists()
    assert (tmp_path / "site" / "s.css").exists()


def test_verbosity_flags_adjust_filter() -> None:
    cli._set_verbosity(verbose=True, quiet=False)
    assert log.filter.level == "DEBUG"
    cli._set_verbosity(verbose=False, quiet=True)
    assert log.filter.level == "WARNING"


def test_languages_lists_registry(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    config = tmp_path / "literate.yaml"
    config.write_text("languages:\n  .vy: {name: python, symbol: '#'}\n", encoding="utf-8")
    cli.languages(config=config)
    lines = capsys.readouterr().out.splitlines()
    assert ".sol\tsolidity\t///" in lines
    assert ".vy\tpython\t#" in lines


def test_main_exits_non_zero_on_failure(
    tmp_path: Path, write_sources: Writer, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    [source] = write_sources({"notes.txt": "plain\n"})
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", source, "--highlighter", "library"])
    assert excinfo.value.code == 1


def test_main_exits_non_zero_on_undecodable_source(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "Latin.sol"
    source.write_bytes(b"/// caf\xe9\nuint a;\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", str(source), "--highlighter", "library"])
    assert excinfo.value.code == 1
    assert not (tmp_path / "docs" / "Latin.html").exists()
