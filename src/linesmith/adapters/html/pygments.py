"""Pygments integration producing token spans as BeautifulSoup nodes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement
from pygments.lexers import ClassNotFound, find_lexer_class_by_name, get_lexer_by_name
from pygments.token import Token, _TokenType


TOKEN_CLASS = "token"
BYTE_ORDER_MARK = "\ufeff"


def token_classes(ttype: _TokenType) -> list[str]:
    """Return the CSS classes for a token type, empty for plain text."""
    if ttype in Token.Text:
        return []
    return [TOKEN_CLASS, *(part.lower() for part in ttype)]


def _merge_tokens(tokens: Iterable[tuple[_TokenType, str]]) -> Iterator[tuple[_TokenType, str]]:
    current_type: _TokenType | None = None
    buffer: list[str] = []
    for ttype, value in tokens:
        if not value:
            continue
        if ttype is current_type:
            buffer.append(value)
            continue
        if current_type is not None:
            yield current_type, "".join(buffer)
        current_type, buffer = ttype, [value]
    if current_type is not None:
        yield current_type, "".join(buffer)


class PygmentsHighlighter:
    """Highlight source code with Pygments lexers.

    One ``<span class="token ...">`` is produced per run of same-typed
    tokens. Spans are not closed at line ends, so a multi-line comment stays
    a single span and the line splitter takes care of cutting it.
    """

    def __init__(self, *, tabsize: int = 0) -> None:
        self.tabsize = tabsize

    def resolve(self, token: str) -> str | None:
        """Map an alias in any case to the lexer's canonical alias."""
        try:
            lexer_cls = find_lexer_class_by_name(token)
        except ClassNotFound:
            return None
        if lexer_cls.aliases:
            return lexer_cls.aliases[0]
        return lexer_cls.name.lower()

    def highlight(self, text: str, language: str) -> list[PageElement]:
        """Return token spans for ``text``; raises ``ClassNotFound`` for unknown names."""
        lexer = get_lexer_by_name(
            language, stripnl=False, stripall=False, ensurenl=False, tabsize=self.tabsize
        )
        soup = BeautifulSoup("", "html.parser")
        nodes: list[PageElement] = []
        # Lexers drop a leading byte order mark.
        if text.startswith(BYTE_ORDER_MARK):
            nodes.append(NavigableString(BYTE_ORDER_MARK))
            text = text[len(BYTE_ORDER_MARK) :]

        for ttype, value in _merge_tokens(lexer.get_tokens(text)):
            classes = token_classes(ttype)
            if classes:
                nodes.append(soup.new_tag("span", attrs={"class": classes}, string=value))
            else:
                nodes.append(NavigableString(value))
        return nodes


__all__ = ["PygmentsHighlighter", "token_classes"]
