"""Custom exception hierarchy for the code highlighting pipeline."""

from __future__ import annotations


class HighlightError(RuntimeError):
    """Base exception for code highlighting failures."""


class UnknownLanguageError(HighlightError):
    """Raised when a declared ``language-*`` class cannot be resolved."""

    def __init__(self, language: str) -> None:
        super().__init__(f"Unknown language: {language}")
        self.language = language


class InvalidNodeError(HighlightError):
    """Raised when a handler receives an unexpected DOM node shape."""


class ConfigurationError(HighlightError):
    """Raised when highlighting options fail validation."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigurationError",
    "HighlightError",
    "InvalidNodeError",
    "UnknownLanguageError",
    "exception_hint",
    "exception_messages",
]
