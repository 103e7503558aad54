"""Common literal values used across literate_pages.

The highlighter wrapper markup, sentinel word, and keyword sets live here so
the segmenter, highlight coordinator, composer, and tests agree on the same
values. Intended for internal use within the literate_pages package.

Examples
--------
>>> from literate_pages import _constants
>>> _constants.HIGHLIGHT_START + "x" + _constants.HIGHLIGHT_END
'<div class="highlight"><pre>x</pre></div>'
>>> "dev" in _constants.DECLARATION_KEYWORDS
True
"""

HIGHLIGHT_START = '<div class="highlight"><pre>'
HIGHLIGHT_END = "</pre></div>"

DIVIDER_WORD = "DIVIDER"

DECLARATION_KEYWORDS = ("notice", "dev", "params", "return")
SUPPRESSED_CODE_PREFIXES = ("pragma", "import")

SECTION_ANCHOR_PREFIX = "section-"
TITLE_STRIP_PREFIX = "docs_"

DEFAULT_OUTPUT_DIR = "docs"
DEFAULT_STYLESHEET = "literate.css"
DEFAULT_CONFIG_FILE = "literate.yaml"
DEFAULT_HIGHLIGHTER_COMMAND = "pygmentize"
