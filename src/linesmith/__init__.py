"""Line-oriented syntax highlighting for HTML code blocks."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from linesmith.adapters.html.pygments import PygmentsHighlighter
from linesmith.adapters.html.renderer import CodeLineRenderer
from linesmith.api import highlight_html, highlight_tree
from linesmith.core.annotator import wrap_lines
from linesmith.core.blocks import BlockReport, CodeBlock, decorate_code_block
from linesmith.core.config import HighlightConfig
from linesmith.core.context import DocumentState, RenderContext
from linesmith.core.diagnostics import LoggingEmitter, NullEmitter
from linesmith.core.exceptions import (
    ConfigurationError,
    HighlightError,
    InvalidNodeError,
    UnknownLanguageError,
)
from linesmith.core.highlighter import Highlighter
from linesmith.core.languages import resolve_language
from linesmith.core.ranges import RangeSpec, parse_meta
from linesmith.core.rules import RenderPhase, renders
from linesmith.core.segmenter import split_lines
from linesmith.version import get_version


try:
    __version__ = _pkg_version("linesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BlockReport",
    "CodeBlock",
    "CodeLineRenderer",
    "ConfigurationError",
    "DocumentState",
    "HighlightConfig",
    "HighlightError",
    "Highlighter",
    "InvalidNodeError",
    "LoggingEmitter",
    "NullEmitter",
    "PygmentsHighlighter",
    "RangeSpec",
    "RenderContext",
    "RenderPhase",
    "UnknownLanguageError",
    "__version__",
    "decorate_code_block",
    "get_version",
    "highlight_html",
    "highlight_tree",
    "parse_meta",
    "renders",
    "resolve_language",
    "split_lines",
    "wrap_lines",
]
