"""Code block handlers for the highlighting renderer."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from linesmith.core.blocks import decorate_code_block
from linesmith.core.context import RenderContext
from linesmith.core.rules import RenderPhase, renders


META_ATTRIBUTE = "data-meta"


def _is_block(element: Tag) -> bool:
    parent = element.parent
    return parent is not None and parent.name == "pre"


@renders("code", phase=RenderPhase.PRE, name="code_meta")
def collect_code_meta(element: Tag, context: RenderContext) -> None:
    """Move the fence meta string off the element into the document state."""
    if not _is_block(element):
        return
    meta = element.get(META_ATTRIBUTE)
    if meta is None:
        return
    if isinstance(meta, list):
        meta = " ".join(meta)
    context.state.remember_meta(element, meta)
    del element[META_ATTRIBUTE]


@renders("code", phase=RenderPhase.BLOCK, name="code_blocks", nestable=False)
def render_code_blocks(element: Tag, context: RenderContext) -> None:
    """Highlight and line-wrap ``<pre><code>`` blocks."""
    if not _is_block(element):
        return

    report = decorate_code_block(
        element,
        highlighter=context.highlighter,
        config=context.config,
        meta=context.state.meta_for(element),
        factory=context.document if isinstance(context.document, BeautifulSoup) else None,
        emitter=context.emitter,
    )
    context.state.record(report)
