"""Protocol implemented by syntax highlighting engines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:  # pragma: no cover - typing only
    from bs4.element import PageElement


@runtime_checkable
class Highlighter(Protocol):
    """Tokenise source code into nested markup.

    ``resolve`` maps a user supplied language token (any case, possibly an
    alias) to the engine's canonical name, or ``None`` when unsupported.

    ``highlight`` receives the canonical name and must return nodes whose
    concatenated text is exactly ``text``.
    """

    def resolve(self, token: str) -> str | None: ...

    def highlight(self, text: str, language: str) -> list[PageElement]: ...


__all__ = ["Highlighter"]
