"""Wrap line fragments in ``code-line`` containers."""

from __future__ import annotations

from collections.abc import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

from .ranges import RangeSpec
from .segmenter import LineFragment


LINE_TAG = "span"
LINE_CLASS = "code-line"
HIGHLIGHT_CLASS = "highlight-line"
LINE_NUMBER_ATTRIBUTE = "line"


def wrap_lines(
    fragments: Iterable[LineFragment],
    ranges: RangeSpec,
    *,
    factory: BeautifulSoup | None = None,
    force_line_numbers: bool = False,
) -> list[Tag]:
    """Return one wrapper per fragment, flagged and numbered according to ``ranges``."""
    soup = factory or BeautifulSoup("", "html.parser")
    numbered = ranges.show_line_numbers or force_line_numbers

    wrappers: list[Tag] = []
    for index, fragment in enumerate(fragments, start=1):
        classes = [LINE_CLASS]
        if ranges.is_highlighted(index):
            classes.append(HIGHLIGHT_CLASS)
        attrs: dict[str, object] = {"class": classes}
        if numbered:
            attrs[LINE_NUMBER_ATTRIBUTE] = str(ranges.start_line + index - 1)

        wrapper = soup.new_tag(LINE_TAG, attrs=attrs)
        for node in fragment:
            wrapper.append(node)
        wrappers.append(wrapper)
    return wrappers


__all__ = [
    "HIGHLIGHT_CLASS",
    "LINE_CLASS",
    "LINE_NUMBER_ATTRIBUTE",
    "LINE_TAG",
    "wrap_lines",
]
