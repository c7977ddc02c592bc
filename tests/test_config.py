import pytest

from linesmith.core.config import HighlightConfig
from linesmith.core.exceptions import ConfigurationError


def test_defaults() -> None:
    config = HighlightConfig()

    assert config.ignore_missing is False
    assert config.show_line_numbers is False
    assert config.default_language is None


def test_camel_case_options_are_accepted() -> None:
    config = HighlightConfig.from_options({"ignoreMissing": True, "showLineNumbers": True})

    assert config.ignore_missing is True
    assert config.show_line_numbers is True


def test_snake_case_overrides_win() -> None:
    config = HighlightConfig.from_options({"ignoreMissing": True}, ignore_missing=False)

    assert config.ignore_missing is False


def test_existing_config_is_extended() -> None:
    base = HighlightConfig(ignore_missing=True)

    config = HighlightConfig.from_options(base, default_language="py")

    assert config.ignore_missing is True
    assert config.default_language == "py"
    assert base.default_language is None


def test_blank_default_language_is_ignored() -> None:
    assert HighlightConfig.from_options(defaultLanguage="  ").default_language is None


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Invalid highlighting options"):
        HighlightConfig.from_options({"prefix": "hl"})


def test_invalid_value_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        HighlightConfig.from_options(ignoreMissing="sometimes")
