"""Constants used across the md-wrap package."""

from __future__ import annotations

import re

DEFAULT_CHARS_PER_LINE = 80
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Markdown markers
FENCE_MARKER = "```"
QUOTE_MARKER = ">"
QUOTE_PREFIX = "> "
BULLET_MARKER = "*"
NUMBER_SEPARATOR = "."

# Sentence detection; abbreviations are matched case-sensitively
SENTENCE_ENDINGS = (".", '."', ".'")
ABBREVIATIONS = ("e.g.", "vs.", "i.e.")

MARKDOWN_EXTENSIONS = (".md", ".markdown")

# Equation rendering
LATEX_BLOCK_FENCE = "```render-latex"
INLINE_LATEX_PATTERN = re.compile(r"`\$([^$]*)\$`")
TEX2SVG_EXECUTABLE = "tex2svg"
