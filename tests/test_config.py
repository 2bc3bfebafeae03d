"""Tests for config.py - StyleConfig validation and load_config merging."""

from pathlib import Path

import pytest

from javastyle.config import DEFAULT_CONFIG, StyleConfig, load_config, parse_naming_style
from javastyle.exceptions import ConfigurationError, InvalidConfigError
from javastyle.format.naming import NamingStyle


class TestStyleConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.min_identifier_length == 4
        assert DEFAULT_CONFIG.max_identifier_length == 15
        assert DEFAULT_CONFIG.class_naming_style is NamingStyle.PASCAL_CASE
        assert DEFAULT_CONFIG.method_naming_style is NamingStyle.CAMEL_CASE
        assert DEFAULT_CONFIG.variable_naming_style is NamingStyle.CAMEL_CASE
        assert DEFAULT_CONFIG.constant_naming_style is NamingStyle.UPPERCASE_UNDERSCORE
        assert DEFAULT_CONFIG.max_line_length == 100
        assert DEFAULT_CONFIG.allowed_violations == 0

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_line_length = 80

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_identifier_length": 0},
            {"min_identifier_length": 10, "max_identifier_length": 5},
            {"max_line_length": 0},
            {"allowed_violations": -1},
            {"verbosity": "loud"},
            {"class_naming_style": "pascal_case"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            StyleConfig(**kwargs)


class TestParseNamingStyle:
    """Test naming style parsing from config text."""

    @pytest.mark.parametrize("text", ["camel_case", "CAMEL_CASE", " camel_case "])
    def test_accepts_name_or_value(self, text):
        assert parse_naming_style(text) is NamingStyle.CAMEL_CASE

    def test_rejects_unknown(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            parse_naming_style("kebab-case", "method_naming_style")
        assert exc_info.value.key == "method_naming_style"


class TestLoadConfig:
    """Test config discovery and priority."""

    def test_no_sources_gives_defaults(self):
        assert load_config() == DEFAULT_CONFIG

    def test_overrides(self):
        config = load_config(max_line_length=120, min_identifier_length=None)
        assert config.max_line_length == 120
        assert config.min_identifier_length == 4

    def test_project_file(self):
        Path("javastyle.toml").write_text("max_line_length = 80\n")
        assert load_config().max_line_length == 80

    def test_explicit_file_with_table(self, tmp_path):
        path = tmp_path / "style.toml"
        path.write_text('[javastyle]\nmethod_naming_style = "pascal_case"\nallowed_violations = 3\n')
        config = load_config(config_file=path)
        assert config.method_naming_style is NamingStyle.PASCAL_CASE
        assert config.allowed_violations == 3

    def test_priority(self, tmp_path, monkeypatch):
        """Explicit file beats project file, env beats files, overrides beat env."""
        Path("javastyle.toml").write_text("max_line_length = 80\nmax_identifier_length = 20\n")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("max_line_length = 90\nallowed_violations = 2\n")
        monkeypatch.setenv("JAVASTYLE_ALLOWED_VIOLATIONS", "5")
        config = load_config(config_file=explicit, max_identifier_length=25)
        assert config.max_line_length == 90
        assert config.allowed_violations == 5
        assert config.max_identifier_length == 25

    def test_env_naming_style(self, monkeypatch):
        monkeypatch.setenv("JAVASTYLE_CONSTANT_NAMING_STYLE", "PASCAL_CASE")
        assert load_config().constant_naming_style is NamingStyle.PASCAL_CASE

    def test_env_invalid_int(self, monkeypatch):
        monkeypatch.setenv("JAVASTYLE_MAX_LINE_LENGTH", "wide")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("max_line_length = = 3\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "unknown.toml"
        path.write_text("max_width = 3\n")
        with pytest.raises(InvalidConfigError):
            load_config(config_file=path)

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"
