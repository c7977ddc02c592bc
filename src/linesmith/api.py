"""Convenience entry points for one-shot highlighting."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bs4.element import Tag

from linesmith.adapters.html.renderer import CodeLineRenderer
from linesmith.core.config import HighlightConfig
from linesmith.core.context import DocumentState
from linesmith.core.diagnostics import DiagnosticEmitter
from linesmith.core.highlighter import Highlighter


def highlight_html(
    html: str,
    options: HighlightConfig | Mapping[str, Any] | None = None,
    *,
    highlighter: Highlighter | None = None,
    emitter: DiagnosticEmitter | None = None,
    **overrides: Any,
) -> str:
    """Return ``html`` with every ``<pre><code>`` block highlighted and line-wrapped.

    ``options`` and ``overrides`` accept ``ignore_missing``/``ignoreMissing``,
    ``show_line_numbers``/``showLineNumbers`` and
    ``default_language``/``defaultLanguage``.
    """
    config = HighlightConfig.from_options(options, **overrides)
    renderer = CodeLineRenderer(config, highlighter=highlighter)
    return renderer.render(html, emitter=emitter)


def highlight_tree(
    root: Tag,
    options: HighlightConfig | Mapping[str, Any] | None = None,
    *,
    highlighter: Highlighter | None = None,
    emitter: DiagnosticEmitter | None = None,
    **overrides: Any,
) -> DocumentState:
    """Decorate the code blocks of an already parsed tree in place."""
    config = HighlightConfig.from_options(options, **overrides)
    renderer = CodeLineRenderer(config, highlighter=highlighter)
    return renderer.process(root, emitter=emitter)


__all__ = ["highlight_html", "highlight_tree"]
