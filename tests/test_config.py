"""Tests for the configuration loading and parsing logic."""

import os
import unittest
from unittest.mock import mock_open, patch

import pytest
import yaml
from pydantic import ValidationError

from glossarygate.config import GatewayConfig, load_config
from glossarygate.types import LanguagePair


class TestGatewayConfig(unittest.TestCase):
    """Test suite for the GatewayConfig model."""

    def test_defaults(self) -> None:
        """1. Defaults: Standard endpoint, xml tag handling and a 30s timeout."""
        config = GatewayConfig()
        assert config.effective_base_uri == "https://api.deepl.com/v2/"
        assert config.default_options == {"tag_handling": "xml", "ignore_tags": "ignore"}
        assert config.timeout == 30.0
        assert config.configured_pairs == []

    def test_free_key(self) -> None:
        """2. Tier: A ':fx' key selects the free endpoint."""
        config = GatewayConfig(authentication_key="0000:fx")
        assert config.is_free_key
        assert config.effective_base_uri == "https://api-free.deepl.com/v2/"

    def test_configured_pairs(self) -> None:
        """3. Pairs: Configured pairs keep their order."""
        config = GatewayConfig.from_dict({"language_pairs": [{"source": "EN", "target": "DE"}, {"source": "de", "target": "en"}]})
        assert config.configured_pairs == [LanguagePair("EN", "DE"), LanguagePair("DE", "EN")]

    def test_is_immutable(self) -> None:
        """4. Frozen: Fields cannot be reassigned."""
        config = GatewayConfig()
        with pytest.raises(ValidationError):
            config.authentication_key = "changed"

    def test_from_dict_invalid(self) -> None:
        """5. Failure: Invalid data raises ValueError."""
        with pytest.raises(ValueError, match="Invalid or missing configuration"):
            GatewayConfig.from_dict({"language_pairs": [{"source": "EN"}]})


class TestConfigLoading(unittest.TestCase):
    """Test suite for loading the YAML configuration."""

    def test_load_config_success(self) -> None:
        """1. Success: Correctly loads a valid YAML configuration file."""
        yaml_content = """
authentication_key: 'abc:fx'
ignored_terms:
  - 'Neos'
  - '\\d+ px'
language_pairs:
  - source: 'EN'
    target: 'DE'
timeout: null
sort_by_language: 'EN'
"""
        with patch("pathlib.Path.open", mock_open(read_data=yaml_content)), patch("pathlib.Path.is_file", return_value=True):
            config = load_config("dummy_path.yaml")

        assert isinstance(config, GatewayConfig)
        assert config.is_free_key
        assert config.ignored_terms == ["Neos", "\\d+ px"]
        assert config.configured_pairs == [LanguagePair("EN", "DE")]
        assert config.timeout is None
        assert config.sort_by_language == "EN"

    def test_load_config_file_not_found(self) -> None:
        """2. Failure: Raises FileNotFoundError for a non-existent file."""
        with patch("pathlib.Path.is_file", return_value=False), pytest.raises(FileNotFoundError):
            load_config("non_existent_file.yaml")

    def test_load_config_rejects_double_quotes(self) -> None:
        """3. Failure: Double-quoted strings are a YAML error."""
        with (
            patch("pathlib.Path.open", mock_open(read_data='authentication_key: "abc"')),
            patch("pathlib.Path.is_file", return_value=True),
            pytest.raises(yaml.YAMLError, match="Double-quoted string"),
        ):
            load_config("dummy_path.yaml")

    def test_load_config_not_a_mapping(self) -> None:
        """4. Failure: A YAML list is not a valid configuration."""
        with (
            patch("pathlib.Path.open", mock_open(read_data="- 'a'\n- 'b'\n")),
            patch("pathlib.Path.is_file", return_value=True),
            pytest.raises(ValueError, match="must be a YAML mapping"),
        ):
            load_config("dummy_path.yaml")

    def test_load_config_invalid_values(self) -> None:
        """5. Failure: Invalid field values raise ValueError."""
        with (
            patch("pathlib.Path.open", mock_open(read_data="timeout: 'soon'\n")),
            patch("pathlib.Path.is_file", return_value=True),
            pytest.raises(ValueError, match="Invalid or missing configuration"),
        ):
            load_config("dummy_path.yaml")

    def test_load_config_key_from_environment(self) -> None:
        """6. Environment: A missing key is read from DEEPL_AUTH_KEY."""
        with (
            patch("pathlib.Path.open", mock_open(read_data="timeout: 10\n")),
            patch("pathlib.Path.is_file", return_value=True),
            patch.dict(os.environ, {"DEEPL_AUTH_KEY": "env-key:fx"}),
        ):
            config = load_config("dummy_path.yaml")

        assert config.authentication_key == "env-key:fx"
        assert config.is_free_key

    def test_load_config_file_key_wins(self) -> None:
        """7. Precedence: A key in the file is not overridden by the environment."""
        with (
            patch("pathlib.Path.open", mock_open(read_data="authentication_key: 'file-key'\n")),
            patch("pathlib.Path.is_file", return_value=True),
            patch.dict(os.environ, {"DEEPL_AUTH_KEY": "env-key"}),
        ):
            config = load_config("dummy_path.yaml")

        assert config.authentication_key == "file-key"


if __name__ == "__main__":
    unittest.main()
