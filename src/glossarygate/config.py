"""Handles the parsing and validation of the GlossaryGate configuration file."""

import logging
import os
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .types import LanguagePair, LanguagePairSetting

logger = logging.getLogger(__name__)

DEFAULT_BASE_URI: Final[str] = "https://api.deepl.com/v2/"
DEFAULT_BASE_URI_FREE: Final[str] = "https://api-free.deepl.com/v2/"
FREE_KEY_SUFFIX: Final[str] = ":fx"
AUTH_KEY_ENV_VAR: Final[str] = "DEEPL_AUTH_KEY"


def _default_options() -> dict[str, str | int | bool]:
    # Masked terms are wrapped in <ignore> tags, which the provider must skip.
    return {"tag_handling": "xml", "ignore_tags": "ignore"}


class GatewayConfig(BaseModel):
    """The immutable configuration handed to the gateway at construction time."""

    model_config = ConfigDict(frozen=True)

    authentication_key: str = ""
    base_uri: str = DEFAULT_BASE_URI
    base_uri_free: str = DEFAULT_BASE_URI_FREE
    default_options: dict[str, str | int | bool] = Field(default_factory=_default_options)
    ignored_terms: list[str] = Field(default_factory=list)
    language_pairs: list[LanguagePairSetting] = Field(default_factory=list)
    timeout: float | None = 30.0
    sort_by_language: str | None = None

    @property
    def is_free_key(self) -> bool:
        """Return True if the authentication key belongs to the free API tier."""
        return self.authentication_key.endswith(FREE_KEY_SUFFIX)

    @property
    def effective_base_uri(self) -> str:
        """Return the base URI matching the tier of the authentication key."""
        return self.base_uri_free if self.is_free_key else self.base_uri

    @property
    def configured_pairs(self) -> list[LanguagePair]:
        """Return the configured language pairs as LanguagePair values, in order."""
        return [setting.to_pair() for setting in self.language_pairs]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GatewayConfig":
        """
        Create a GatewayConfig from a dictionary.

        Raises:
            ValueError: If the data does not describe a valid configuration.

        """
        try:
            return cls(**data)
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e


class StrictSingleQuoteLoader(yaml.SafeLoader):
    """
    A custom YAML loader that enforces the use of single quotes for all strings.

    Ignored-term patterns are regular expressions; single quotes keep their
    backslashes literal, so double-quoted strings are rejected.
    """


def _construct_scalar(loader: StrictSingleQuoteLoader, node: yaml.ScalarNode) -> Any:  # noqa: ANN401
    """Construct a scalar node, but first check its style."""
    if node.style == '"':
        line = node.start_mark.line + 1
        col = node.start_mark.column + 1
        msg = f"Double-quoted string found at line {line}, column {col}. Please use single quotes (') instead."
        raise yaml.YAMLError(msg)
    return loader.construct_scalar(node)


StrictSingleQuoteLoader.add_constructor("tag:yaml.org,2002:str", _construct_scalar)


def load_config(config_path: str) -> GatewayConfig:
    """
    Load, parse, and validate the YAML configuration file.

    The authentication key may be left out of the file and supplied through
    the DEEPL_AUTH_KEY environment variable instead.

    Args:
        config_path: The path to the main.yaml file.

    Returns:
        A validated GatewayConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the configuration is invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    def _raise_type_error(msg: str) -> None:
        """Raise a TypeError with a specific message."""
        raise TypeError(msg)

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.load(f, Loader=StrictSingleQuoteLoader)  # noqa: S506

        if not isinstance(data, dict):
            _raise_type_error("Config file must be a YAML mapping (dictionary).")

        if not data.get("authentication_key"):
            env_key = os.getenv(AUTH_KEY_ENV_VAR)
            if env_key:
                logger.debug("Using authentication key from %s.", AUTH_KEY_ENV_VAR)
                data["authentication_key"] = env_key

        config = GatewayConfig.from_dict(data)

    except yaml.YAMLError as e:
        msg = f"Error parsing YAML config file: {e}"
        raise yaml.YAMLError(msg) from e
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Invalid or missing configuration: {e}"
        raise ValueError(msg) from e
    else:
        if not config.authentication_key:
            logger.warning("No authentication key configured. Provider requests will be rejected.")
        return config
