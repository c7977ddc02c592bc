"""Configuration model consumed by the code highlighting pipeline.

HighlightConfig

`ignore_missing` (`bool`, alias `ignoreMissing`)
: Keep going when a block declares a ``language-*`` class the highlighter does
  not know. The block is still split into lines and annotated, only the
  tokenisation step is skipped. When `False` (default) an unknown language
  aborts the whole document with :class:`UnknownLanguageError`.

`show_line_numbers` (`bool`, alias `showLineNumbers`)
: Attach a ``line`` attribute to every line wrapper of every block, whether
  or not the block's meta string asks for it.

`default_language` (`str | None`, alias `defaultLanguage`)
: Language applied to ``<pre><code>`` blocks that carry no ``language-*``
  class. The matching class is added to the block so stylesheets can target
  it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class HighlightConfig(BaseModel):
    """Options recognised by the highlighter."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    ignore_missing: bool = Field(default=False, alias="ignoreMissing")
    show_line_numbers: bool = Field(default=False, alias="showLineNumbers")
    default_language: str | None = Field(default=None, alias="defaultLanguage")

    @field_validator("default_language")
    @classmethod
    def _blank_language_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        candidate = value.strip()
        return candidate or None

    @classmethod
    def from_options(
        cls,
        options: HighlightConfig | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> HighlightConfig:
        """Build a config from a mapping, an existing config, or keyword overrides."""
        if isinstance(options, HighlightConfig):
            payload: dict[str, Any] = options.model_dump(by_alias=True)
        else:
            payload = _aliased(options or {})
        payload.update(_aliased(overrides))
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid highlighting options: {exc}") from exc


def _aliased(values: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite snake_case field names to their camelCase aliases."""
    fields = HighlightConfig.model_fields
    result: dict[str, Any] = {}
    for key, value in values.items():
        field = fields.get(key)
        result[field.alias if field is not None and field.alias else key] = value
    return result


__all__ = ["HighlightConfig"]
