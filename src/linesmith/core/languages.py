"""Resolve ``language-*`` classes against the highlighter's alias table."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .highlighter import Highlighter


LANGUAGE_PREFIX = "language-"


@dataclass(frozen=True, slots=True)
class NoLanguage:
    """The block declares no language; it is segmented without tokenising."""


@dataclass(frozen=True, slots=True)
class ResolvedLanguage:
    """A declared token the highlighter understands."""

    token: str
    name: str


@dataclass(frozen=True, slots=True)
class UnknownLanguage:
    """A declared token the highlighter does not support."""

    token: str


@dataclass(frozen=True, slots=True)
class SuppressedLanguage:
    """An unknown token tolerated because missing languages are ignored."""

    token: str


LanguageResolution = NoLanguage | ResolvedLanguage | UnknownLanguage | SuppressedLanguage


def language_token(classes: Iterable[str]) -> str | None:
    """Return the token of the first ``language-*`` class, prefix matched case-insensitively."""
    for cls in classes:
        if cls[: len(LANGUAGE_PREFIX)].lower() == LANGUAGE_PREFIX:
            return cls[len(LANGUAGE_PREFIX) :] or None
    return None


def resolve_token(token: str | None, highlighter: Highlighter) -> LanguageResolution:
    """Resolve a bare language token."""
    if not token:
        return NoLanguage()
    name = highlighter.resolve(token)
    if name is None:
        return UnknownLanguage(token)
    return ResolvedLanguage(token=token, name=name)


def resolve_language(classes: Iterable[str], highlighter: Highlighter) -> LanguageResolution:
    """Resolve the language declared by an element's class list."""
    return resolve_token(language_token(classes), highlighter)


__all__ = [
    "LANGUAGE_PREFIX",
    "LanguageResolution",
    "NoLanguage",
    "ResolvedLanguage",
    "SuppressedLanguage",
    "UnknownLanguage",
    "language_token",
    "resolve_language",
    "resolve_token",
]
