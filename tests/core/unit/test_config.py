"""
Unit tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from doc_flow.core.config import AutodocConfig, load_config
from doc_flow.core.errors import ConfigurationError


class TestAutodocConfig:
    """Test cases for the immutable config model."""

    def test_defaults(self):
        config = AutodocConfig()
        assert config.namespaces == []
        assert config.tags == []
        assert config.grep is None
        assert config.render_markdown is False
        assert config.language == "javascript"

    def test_frozen(self):
        config = AutodocConfig()
        with pytest.raises(ValidationError):
            config.tags = ["public"]

    def test_with_tags_returns_new_config(self):
        config = AutodocConfig(namespaces=["Lib"])
        derived = config.with_tags(["public"])
        assert derived.tags == ["public"]
        assert derived.namespaces == ["Lib"]
        assert config.tags == []


class TestLoadConfig:
    """Test cases for merging defaults, YAML and CLI values."""

    def test_yaml_then_cli(self, temp_dir):
        config_file = temp_dir / "docflow.config.yaml"
        config_file.write_text(
            "namespaces: [Lib]\n"
            "grep: map\n"
            "example_handlers:\n"
            "  - pattern: '^even$'\n"
            "    template: even\n"
        )
        config = load_config(str(config_file), {"grep": "filter", "tags": None})
        assert config.namespaces == ["Lib"]
        assert config.grep == "filter"
        assert config.tags == []
        assert config.example_handlers == [{"pattern": "^even$", "template": "even"}]

    def test_comma_separated_cli_lists(self, temp_dir):
        config = load_config(str(temp_dir / "missing.yaml"), {"tags": "public, beta"})
        assert config.tags == ["public", "beta"]

    def test_missing_explicit_file_is_not_fatal(self, temp_dir):
        config = load_config(str(temp_dir / "nope.yaml"))
        assert config == AutodocConfig()

    def test_unknown_option_rejected(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_config(str(temp_dir / "nope.yaml"), {"colour": "blue"})

    def test_unsupported_language(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_config(str(temp_dir / "nope.yaml"), {"language": "cobol"})
