"""Tests for configuration loading and CLI argument parsing."""

from decimal import Decimal

import pytest

from numeral_input.config import (
    _load_config_dict,
    _save_config_dict,
    load_default_format,
    load_language,
    parse_args,
    save_format,
)


class TestParseArgs:
    """Tests for CLI argument parsing."""

    def test_no_args(self):
        args = parse_args([])
        assert args.value is None
        assert args.format is None
        assert args.language is None

    def test_value(self):
        args = parse_args(["1000"])
        assert args.value == Decimal("1000")

    def test_grouped_value(self):
        args = parse_args(["1,234.5"])
        assert args.value == Decimal("1234.5")

    def test_empty_value_means_no_value(self):
        assert parse_args([""]).value is None

    def test_invalid_value_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["abc"])

    def test_format_short_flag(self):
        args = parse_args(["-f", "0,0[.00]"])
        assert args.format == "0,0[.00]"

    def test_format_long_flag(self):
        args = parse_args(["--format", "$0,0.00"])
        assert args.format == "$0,0.00"

    def test_invalid_format_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--format", "###"])

    def test_language(self):
        args = parse_args(["-l", "de-DE"])
        assert args.language == "de-DE"

    def test_unknown_language_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--language", "xx-XX"])


class TestLoadConfigDict:
    """Tests for the _load_config_dict private helper."""

    def test_returns_empty_dict_when_config_missing(self):
        """Returns an empty dict when the config file does not exist."""
        assert _load_config_dict() == {}

    def test_returns_empty_dict_on_malformed_toml(self, config_path):
        """Returns an empty dict when the TOML file is invalid."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text("not valid toml === !!!")
        assert _load_config_dict() == {}

    def test_returns_parsed_dict_from_valid_toml(self, config_path):
        """Returns the correct dict when the TOML file is valid."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text('format = "0.00"\n')
        assert _load_config_dict() == {"format": "0.00"}


class TestLoadDefaultFormat:
    """Tests for load_default_format."""

    def test_default_when_not_set(self):
        assert load_default_format() == "0,0"

    def test_returns_configured_value(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('format = "0,0[.00]"\n')
        assert load_default_format() == "0,0[.00]"

    def test_invalid_pattern_falls_back(self, config_path):
        """A pattern that cannot be compiled is ignored."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text('format = "#,##0.00"\n')
        assert load_default_format() == "0,0"


class TestLoadLanguage:
    """Tests for load_language."""

    def test_default_when_not_set(self):
        assert load_language() == "en-US"

    def test_returns_configured_value(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('language = "fr-FR"\n')
        assert load_language() == "fr-FR"

    def test_unknown_language_falls_back(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('language = "xx-XX"\n')
        assert load_language() == "en-US"


class TestSaveFormat:
    """Tests for save_format and its round-trip with load_default_format."""

    def test_save_creates_config_file(self, config_path):
        save_format("0.00")
        assert config_path.exists()
        assert "0.00" in config_path.read_text()

    def test_load_returns_saved_value(self):
        save_format("$0,0.00")
        assert load_default_format() == "$0,0.00"

    def test_save_overwrites_previous_value(self):
        save_format("0.00")
        save_format("0%")
        assert load_default_format() == "0%"

    def test_save_keeps_language(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('language = "de-DE"\n')
        save_format("0,0.00")
        assert load_language() == "de-DE"
        assert load_default_format() == "0,0.00"


class TestSaveConfigDict:
    """Tests for the flat config.toml writer."""

    def test_values_are_escaped(self):
        _save_config_dict({"format": 'say "0"\\'})
        assert _load_config_dict() == {"format": 'say "0"\\'}

    def test_save_format_keeps_language(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('format = "0,0"\nlanguage = "it-IT"\n')
        save_format("0.00")
        assert _load_config_dict() == {"format": "0.00", "language": "it-IT"}

    def test_save_format_drops_unknown_sections(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('format = "0,0"\n\n[presets]\nmoney = "$0,0.00"\n')
        save_format("0.00")
        assert _load_config_dict() == {"format": "0.00"}
