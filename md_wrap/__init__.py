"""
md-wrap: reflow Markdown prose to a fixed width.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-wrap --width 72 < notes.md
    md-wrap --in-place README.md
    md-latex -i draft.md -o README.md --img-dir images

Library Usage:
    from md_wrap import reflow_markdown

    text = reflow_markdown("This is one. This is two.\\n", chars_per_line=72)
"""

from .classifier import count_list_indent, count_quote_depth
from .config import ConfigError, WrapConfig
from .emitter import ends_sentence
from .exceptions import MdWrapError, RenderError
from .latex import EquationRenderer, render_document, render_equations
from .models import ListState, ListType, ReflowContext
from .reflow import ReflowFileError, reflow_file, reflow_markdown, reflow_stream

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "reflow_markdown",
    "reflow_stream",
    "reflow_file",
    "ends_sentence",
    "count_quote_depth",
    "count_list_indent",
    # Equation rendering
    "EquationRenderer",
    "render_equations",
    "render_document",
    # Data models
    "ListType",
    "ListState",
    "ReflowContext",
    "WrapConfig",
    # Exceptions
    "ConfigError",
    "MdWrapError",
    "ReflowFileError",
    "RenderError",
    # Version
    "__version__",
]
