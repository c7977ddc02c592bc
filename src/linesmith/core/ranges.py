"""Parse fence meta strings into line highlighting directives.

A meta string is the free text that follows the language on a code fence,
for example ``{1,3-5} showLineNumbers``. Only two directives are understood:

``{...}``
: comma separated line numbers and inclusive ``a-b`` ranges. Only the first
  group is read.

``showLineNumbers`` / ``showLineNumbers=<n>``
: enable line numbers, optionally starting the count at ``n``.

Anything else is ignored. Meta strings routinely carry annotations meant for
other tools, so a malformed group yields no highlighted lines rather than an
error.
"""

from __future__ import annotations

from dataclasses import dataclass
import re


_RANGE_GROUP = re.compile(r"\{([^{}]*)\}")
_RANGE_ITEM = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")
_LINE_NUMBERS = re.compile(r"(?<!\S)showLineNumbers(?:=(\d+))?(?!\S)")


@dataclass(frozen=True, slots=True)
class RangeSpec:
    """Line directives derived from a single code block's meta string."""

    highlighted_lines: frozenset[int] = frozenset()
    show_line_numbers: bool = False
    start_line: int = 1

    def is_highlighted(self, index: int) -> bool:
        """Return whether the 1-based physical line ``index`` is emphasised."""
        return index in self.highlighted_lines


def parse_line_ranges(expression: str) -> frozenset[int]:
    """Expand ``1,3-5`` style expressions into a set of positive integers.

    Returns an empty set when any item of the expression is malformed.
    """
    lines: set[int] = set()
    for chunk in expression.split(","):
        item = chunk.strip()
        if not item:
            continue
        match = _RANGE_ITEM.match(item)
        if match is None:
            return frozenset()
        low = int(match.group(1))
        high = int(match.group(2)) if match.group(2) is not None else low
        lines.update(value for value in range(low, high + 1) if value > 0)
    return frozenset(lines)


def parse_meta(meta: str | None) -> RangeSpec:
    """Parse a code fence meta string into a :class:`RangeSpec`."""
    if not meta:
        return RangeSpec()

    highlighted: frozenset[int] = frozenset()
    group = _RANGE_GROUP.search(meta)
    if group is not None:
        highlighted = parse_line_ranges(group.group(1))

    show_line_numbers = False
    start_line = 1
    numbering = _LINE_NUMBERS.search(meta)
    if numbering is not None:
        show_line_numbers = True
        if numbering.group(1) is not None:
            start_line = max(1, int(numbering.group(1)))

    return RangeSpec(
        highlighted_lines=highlighted,
        show_line_numbers=show_line_numbers,
        start_line=start_line,
    )


__all__ = ["RangeSpec", "parse_line_ranges", "parse_meta"]
