"""Split highlighted markup back into physical source lines.

Highlighters wrap tokens in spans without caring about line boundaries: a
multi-line comment or string is a single span whose text contains newlines.
To wrap each line individually the markup has to be cut at every ``\\n``
while keeping every enclosing span intact on both sides of the cut.

The splitter walks the tree depth-first and keeps the stack of spans that are
open on the current line. A newline closes the current line after appending
the ``\\n`` to the text it belongs to, then re-opens a fresh copy of every span
on the stack for the next line. Copies are built from the original tag name
and attributes so no element is ever shared between two lines, and the input
nodes are left untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .exceptions import InvalidNodeError


LineFragment = list[PageElement]


def _copy_attrs(attrs: dict[str, Any]) -> dict[str, Any]:
    return {key: list(value) if isinstance(value, list) else value for key, value in attrs.items()}


class _LineSplitter:
    """Depth-first walker accumulating nodes into per-line fragments."""

    def __init__(self, factory: BeautifulSoup) -> None:
        self.factory = factory
        self.lines: list[LineFragment] = [[]]
        self.open: list[Tag] = []
        self.has_text = False

    def _append(self, node: PageElement) -> None:
        if self.open:
            self.open[-1].append(node)
        else:
            self.lines[-1].append(node)

    def _open(self, name: str, attrs: dict[str, Any]) -> None:
        clone = self.factory.new_tag(name, attrs=_copy_attrs(attrs))
        self._append(clone)
        self.open.append(clone)

    def _break_line(self) -> None:
        reopened = [(tag.name, tag.attrs) for tag in self.open]
        self.lines.append([])
        self.open = []
        for name, attrs in reopened:
            self._open(name, attrs)

    def walk(self, node: PageElement) -> None:
        if isinstance(node, Tag):
            self._open(node.name, node.attrs)
            depth = len(self.open)
            for child in node.children:
                self.walk(child)
            # Line breaks rebuild the stack, so pop by depth rather than identity.
            del self.open[depth - 1 :]
            return

        if isinstance(node, PreformattedString):
            self._append(type(node)(str(node)))
            return

        if isinstance(node, NavigableString):
            text = str(node)
            if text:
                self.has_text = True
            factory = type(node)
            *complete, tail = text.split("\n")
            for part in complete:
                self._append(factory(part + "\n"))
                self._break_line()
            if tail:
                self._append(factory(tail))
            return

        raise InvalidNodeError(f"Unsupported markup node: {type(node).__name__}")


def split_lines(
    nodes: Iterable[PageElement],
    *,
    expected_lines: int | None = None,
    factory: BeautifulSoup | None = None,
) -> list[LineFragment]:
    """Partition markup into one fragment per ``\\n``-delimited record.

    Text with ``k`` newlines yields ``k + 1`` fragments, the last one empty
    when the text ends with a newline. Empty text yields no fragment at all.
    """
    splitter = _LineSplitter(factory or BeautifulSoup("", "html.parser"))
    for node in nodes:
        splitter.walk(node)

    lines = splitter.lines if splitter.has_text else []
    if expected_lines is not None and len(lines) != expected_lines:
        raise InvalidNodeError(
            f"Highlighted markup spans {len(lines)} line(s), expected {expected_lines}"
        )
    return lines


def fragment_text(fragment: Iterable[PageElement]) -> str:
    """Return the text carried by a line fragment."""
    parts: list[str] = []
    for node in fragment:
        if isinstance(node, Tag):
            parts.append(node.get_text())
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            parts.append(str(node))
    return "".join(parts)


__all__ = ["LineFragment", "fragment_text", "split_lines"]
