"""Load the literate configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .._constants import DEFAULT_CONFIG_FILE
from ..composer import TAG_MODES
from ..errors import ConfigError
from .models import DIVIDER_MODES, HIGHLIGHTER_BACKENDS, LanguageConfig, LiterateConfig


def load_config(path: Path | None = None) -> LiterateConfig:
    """Load the YAML configuration controlling a documentation run.

    Parameters
    ----------
    path : Path, optional
        Configuration file to read. When ``None``, ``literate.yaml`` in the
        working directory is used if it exists, otherwise defaults apply.

    Returns
    -------
    LiterateConfig
        Parsed configuration with defaults filled in.

    Raises
    ------
    ConfigError
        If an explicitly requested file does not exist, the YAML cannot be
        parsed, or a setting holds an unsupported value.

    Examples
    --------
    >>> from pathlib import Path
    >>> from literate_pages.config import load_config
    >>> load_config(Path("literate.yaml")).tag_mode  # doctest: +SKIP
    'preserve'
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if not default_path.exists():
            return LiterateConfig()
        path = default_path
    elif not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise ConfigError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "'defaults' must be a mapping."
        raise ConfigError(msg)

    base = LiterateConfig()
    max_workers = defaults.get("max_workers", base.max_workers)
    if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
        msg = f"'max_workers' must be a positive integer, got {max_workers!r}."
        raise ConfigError(msg)

    return LiterateConfig(
        output_dir=Path(defaults.get("output_dir", base.output_dir)),
        stylesheet=str(defaults.get("stylesheet", base.stylesheet)),
        pygments_style=str(defaults.get("pygments_style", base.pygments_style)),
        highlighter=_choice(defaults, "highlighter", base.highlighter, HIGHLIGHTER_BACKENDS),
        highlighter_command=str(
            defaults.get("highlighter_command", base.highlighter_command)
        ),
        divider=_choice(defaults, "divider", base.divider, DIVIDER_MODES),
        tag_mode=_choice(defaults, "tag_mode", base.tag_mode, TAG_MODES),
        max_workers=max_workers,
        languages=_build_languages(raw.get("languages") or {}),
    )


def _choice(
    payload: typ.Mapping[str, typ.Any],
    key: str,
    default: str,
    allowed: typ.Sequence[str],
) -> str:
    """Return ``payload[key]`` if it is one of ``allowed``."""
    value = payload.get(key, default)
    if value not in allowed:
        msg = f"'{key}' must be one of {', '.join(allowed)}; got {value!r}."
        raise ConfigError(msg)
    return value


def _build_languages(payload: typ.Mapping[str, typ.Any]) -> dict[str, LanguageConfig]:
    """Build language entries keyed by dotted extension."""
    if not isinstance(payload, dict):
        msg = "'languages' must be a mapping of extension to settings."
        raise ConfigError(msg)
    languages: dict[str, LanguageConfig] = {}
    for extension, entry in payload.items():
        match entry:
            case {"name": str(name), "symbol": str(symbol)} if name and symbol:
                key = extension if extension.startswith(".") else f".{extension}"
                languages[key] = LanguageConfig(name=name, symbol=symbol)
            case _:
                msg = f"Language '{extension}' needs non-empty 'name' and 'symbol'."
                raise ConfigError(msg)
    return languages


__all__ = ["load_config"]
