"""High-level renderer decorating the code blocks of an HTML fragment."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from importlib import metadata
import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Tag

from linesmith.core.config import HighlightConfig
from linesmith.core.context import DocumentState, RenderContext
from linesmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from linesmith.core.exceptions import HighlightError
from linesmith.core.highlighter import Highlighter
from linesmith.core.rules import RenderEngine, RenderPhase

from .pygments import PygmentsHighlighter


logger = logging.getLogger(__name__)


class CodeLineRenderer:
    """Highlight ``<pre><code>`` blocks of HTML documents."""

    _ENTRY_POINT_GROUP = "linesmith.handlers"

    def __init__(
        self,
        config: HighlightConfig | Mapping[str, Any] | None = None,
        highlighter: Highlighter | None = None,
        parser: str = "html.parser",
        load_entry_points: bool = True,
    ) -> None:
        self.config = HighlightConfig.from_options(config)
        self.highlighter = highlighter or PygmentsHighlighter()
        self.parser_backend = parser

        self.engine = RenderEngine()
        self._register_builtin_handlers()
        if load_entry_points:
            self._register_entry_point_handlers()

    def _register_builtin_handlers(self) -> None:
        from ..handlers import code as code_handlers

        self.engine.collect_from(code_handlers)

    def _register_entry_point_handlers(self) -> None:
        group = metadata.entry_points().select(group=self._ENTRY_POINT_GROUP)
        for entry_point in sorted(group, key=lambda ep: ep.name):
            logger.debug("Loading highlighting handlers from %s", entry_point.value)
            self.register(entry_point.load())

    def register(self, handler: Any) -> None:
        """Register additional handlers.

        Accepts callables decorated with :func:`renders` or modules/classes
        exposing decorated attributes.
        """
        if getattr(handler, "__render_rule__", None) is not None:
            self.engine.register(handler)
            return
        self.engine.collect_from(handler)

    def parse(self, html: str, *, emitter: DiagnosticEmitter | None = None) -> BeautifulSoup:
        """Parse ``html`` with the configured backend, falling back to ``html.parser``."""
        try:
            return BeautifulSoup(html, self.parser_backend)
        except FeatureNotFound:
            if self.parser_backend == "html.parser":
                raise
            (emitter or NullEmitter()).event(
                "parser_fallback",
                {"preferred": self.parser_backend, "fallback": "html.parser"},
            )
            self.parser_backend = "html.parser"
            return BeautifulSoup(html, "html.parser")

    def process(
        self,
        root: Tag,
        *,
        state: DocumentState | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> DocumentState:
        """Decorate every code block below ``root`` in place."""
        document_state = state or DocumentState()
        context = RenderContext(
            config=self.config,
            highlighter=self.highlighter,
            document=root,
            state=document_state,
            emitter=emitter or NullEmitter(),
        )
        try:
            self.engine.run(root, context)
        except HighlightError:
            raise
        except Exception as exc:
            raise HighlightError("Code highlighting failed") from exc
        logger.debug("Decorated %d code block(s)", document_state.highlighted_blocks)
        return document_state

    def render(
        self,
        html: str,
        *,
        state: DocumentState | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> str:
        """Return ``html`` with its code blocks highlighted."""
        soup = self.parse(html, emitter=emitter)
        self.process(soup, state=state, emitter=emitter)
        return soup.decode(formatter="minimal")

    def iter_registered_rules(self) -> Iterable[tuple[RenderPhase, str]]:
        """Expose registered rules for debugging."""
        for phase in RenderPhase:
            for rule in self.engine.registry.iter_phase(phase):
                yield phase, rule.name


__all__ = ["CodeLineRenderer"]
