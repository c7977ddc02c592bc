"""Decorate a single ``<code>`` element with highlighted, line-wrapped markup.

The work for one block moves through a fixed sequence of steps:

`Found`
: gather the ``language-*`` class, the meta string and the raw text.

`LanguageResolved`
: look the language up in the highlighter's alias table. Unknown languages
  abort with :class:`UnknownLanguageError` unless ``ignore_missing`` is set.

`Tokenized` / `Untokenized`
: run the highlighter, or keep the raw text as a single text node.

`Segmented`, `Annotated`
: split into lines and wrap each line.

`Written`
: swap the element's children and add the ``code-highlight`` class. Nothing
  touches the element before this step, so a failure leaves it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, Tag

from .annotator import wrap_lines
from .config import HighlightConfig
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import InvalidNodeError, UnknownLanguageError
from .languages import (
    LANGUAGE_PREFIX,
    LanguageResolution,
    ResolvedLanguage,
    SuppressedLanguage,
    UnknownLanguage,
    language_token,
    resolve_token,
)
from .ranges import parse_meta
from .segmenter import split_lines


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .highlighter import Highlighter


CODE_HIGHLIGHT_CLASS = "code-highlight"


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Inputs extracted from a ``<code>`` element."""

    language_class: str | None
    meta: str | None
    raw_text: str


@dataclass(frozen=True, slots=True)
class BlockReport:
    """Summary of a decorated block."""

    language: LanguageResolution
    lines: int
    highlighted: tuple[int, ...]


def gather_classes(element: Tag) -> list[str]:
    """Return the element's class list whatever shape the parser stored it in."""
    value = element.get("class")
    if isinstance(value, str):
        return value.split()
    if value is None:
        return []
    return [item for item in value if isinstance(item, str)]


def extract_code_block(element: Tag, meta: str | None = None) -> CodeBlock:
    """Collect the language class, meta string and text of a ``<code>`` element."""
    if element.name != "code":
        raise InvalidNodeError(f"Expected a <code> element, got <{element.name}>")
    language_class = next(
        (
            cls
            for cls in gather_classes(element)
            if cls[: len(LANGUAGE_PREFIX)].lower() == LANGUAGE_PREFIX
        ),
        None,
    )
    # Same newline normalisation HTML parsers and Pygments apply.
    raw_text = element.get_text().replace("\r\n", "\n").replace("\r", "\n")
    return CodeBlock(language_class=language_class, meta=meta, raw_text=raw_text)


def _resolve(
    block: CodeBlock,
    config: HighlightConfig,
    highlighter: Highlighter,
    emitter: DiagnosticEmitter,
) -> tuple[LanguageResolution, str | None]:
    """Return the language resolution and any class the element should gain."""
    added_class: str | None = None
    token = language_token([block.language_class]) if block.language_class else None
    if token is None and config.default_language:
        token = config.default_language
        added_class = f"{LANGUAGE_PREFIX}{token}"

    resolution = resolve_token(token, highlighter)
    if isinstance(resolution, UnknownLanguage):
        if not config.ignore_missing:
            raise UnknownLanguageError(resolution.token)
        emitter.warning(f"Unknown language '{resolution.token}', leaving block untokenised.")
        resolution = SuppressedLanguage(resolution.token)
    return resolution, added_class


def decorate_code_block(
    element: Tag,
    *,
    highlighter: Highlighter,
    config: HighlightConfig | None = None,
    meta: str | None = None,
    factory: BeautifulSoup | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> BlockReport:
    """Highlight, split and annotate ``element`` in place."""
    active_config = config or HighlightConfig()
    active_emitter = emitter or NullEmitter()
    soup = factory or BeautifulSoup("", "html.parser")

    block = extract_code_block(element, meta)
    resolution, added_class = _resolve(block, active_config, highlighter, active_emitter)

    nodes: list[PageElement]
    if isinstance(resolution, ResolvedLanguage):
        nodes = highlighter.highlight(block.raw_text, resolution.name)
    else:
        nodes = [NavigableString(block.raw_text)]

    expected = block.raw_text.count("\n") + 1 if block.raw_text else 0
    fragments = split_lines(nodes, expected_lines=expected, factory=soup)
    ranges = parse_meta(block.meta)
    wrappers = wrap_lines(
        fragments,
        ranges,
        factory=soup,
        force_line_numbers=active_config.show_line_numbers,
    )

    classes = gather_classes(element)
    for extra in (added_class, CODE_HIGHLIGHT_CLASS):
        if extra and extra not in classes:
            classes.append(extra)
    element.clear()
    for wrapper in wrappers:
        element.append(wrapper)
    element["class"] = classes

    highlighted = tuple(
        index for index in range(1, len(wrappers) + 1) if ranges.is_highlighted(index)
    )
    report = BlockReport(language=resolution, lines=len(wrappers), highlighted=highlighted)
    active_emitter.event(
        "code_block",
        {
            "language": resolution.name if isinstance(resolution, ResolvedLanguage) else None,
            "lines": report.lines,
            "highlighted": list(highlighted),
        },
    )
    return report


__all__ = [
    "CODE_HIGHLIGHT_CLASS",
    "BlockReport",
    "CodeBlock",
    "decorate_code_block",
    "extract_code_block",
    "gather_classes",
]
