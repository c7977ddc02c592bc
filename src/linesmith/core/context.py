"""Rendering context primitives shared across the highlighting pipeline."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .config import HighlightConfig
from .diagnostics import DiagnosticEmitter, NullEmitter


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .blocks import BlockReport
    from .highlighter import Highlighter
    from .rules import RenderPhase


@dataclass(slots=True)
class DocumentState:
    """In-memory state accumulated while processing a document."""

    meta: dict[int, str] = field(default_factory=dict)
    reports: list[BlockReport] = field(default_factory=list)

    def remember_meta(self, node: Any, meta: str) -> None:
        """Attach an out-of-band meta string to a ``<code>`` node."""
        self.meta[id(node)] = meta

    def meta_for(self, node: Any) -> str | None:
        """Return and forget the meta string recorded for ``node``, if any."""
        return self.meta.pop(id(node), None)

    def record(self, report: BlockReport) -> None:
        """Keep the summary of a decorated block."""
        self.reports.append(report)

    @property
    def highlighted_blocks(self) -> int:
        """Number of code blocks decorated so far."""
        return len(self.reports)


@dataclass
class RenderContext:
    """Shared context passed to every handler during rendering."""

    config: HighlightConfig
    highlighter: Highlighter
    document: Any
    state: DocumentState = field(default_factory=DocumentState)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    phase: RenderPhase | None = None

    _processed_nodes: defaultdict[int, set[int]] = field(
        default_factory=lambda: defaultdict(set), init=False
    )
    _skip_children: defaultdict[int, set[int]] = field(
        default_factory=lambda: defaultdict(set), init=False
    )

    def enter_phase(self, phase: RenderPhase) -> None:
        """Mark the current phase and reset per-phase traversal data."""
        self.phase = phase
        self._skip_children[phase.value].clear()

    def mark_processed(self, node: Any, *, phase: RenderPhase | None = None) -> None:
        """Flag a node as already transformed for the selected phase."""
        label = phase or self.phase
        if label is None:
            return
        self._processed_nodes[label.value].add(id(node))

    def is_processed(self, node: Any, *, phase: RenderPhase | None = None) -> bool:
        """Check whether a node has been processed in the given phase."""
        label = phase or self.phase
        if label is None:
            return False
        return id(node) in self._processed_nodes[label.value]

    def suppress_children(self, node: Any, *, phase: RenderPhase | None = None) -> None:
        """Prevent traversal of node children for the active phase."""
        label = phase or self.phase
        if label is None:
            return
        self._skip_children[label.value].add(id(node))

    def should_skip_children(self, node: Any, *, phase: RenderPhase | None = None) -> bool:
        """Check whether children should be skipped during traversal."""
        label = phase or self.phase
        if label is None:
            return False
        return id(node) in self._skip_children[label.value]


__all__ = ["DocumentState", "RenderContext"]
