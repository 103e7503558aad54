"""Load and validate the optional ``literate.yaml`` configuration.

The file holds a ``defaults`` mapping for output and highlighting settings and
a ``languages`` mapping that extends the built-in language table. The primary
entry point is :func:`load_config`, which applies defaults, validates the
enumerated settings, and returns a frozen :class:`LiterateConfig`.

Examples
--------
>>> from pathlib import Path
>>> from literate_pages.config import load_config
>>> config = load_config(Path("literate.yaml"))  # doctest: +SKIP
>>> config.output_dir  # doctest: +SKIP
PosixPath('docs')
"""

from .loader import load_config
from .models import (
    DIVIDER_MODES,
    HIGHLIGHTER_BACKENDS,
    LanguageConfig,
    LiterateConfig,
)

__all__ = [
    "DIVIDER_MODES",
    "HIGHLIGHTER_BACKENDS",
    "LanguageConfig",
    "LiterateConfig",
    "load_config",
]
