import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

# Default configuration values
DEFAULT_CONFIG_PATH = "docflow.config.yaml"
DEFAULT_LANGUAGE = "javascript"
SUPPORTED_LANGUAGES = ("javascript",)


class AutodocConfig(BaseModel):
    """
    Options for one documentation run. Instances are immutable; derived
    settings (such as the automatic ``public`` tag filter) produce a new config.
    """
    namespaces: List[str] = Field(default_factory=list)  # Restrict output to these namespaces
    tags: List[str] = Field(default_factory=list)  # Restrict docs to those carrying any of these tags
    grep: Optional[str] = None  # Regex applied to member names after aggregation
    example_handlers: List[Dict[str, Any]] = Field(default_factory=list)  # [{pattern, template}, ...]
    render_markdown: bool = False
    language: str = Field(default=DEFAULT_LANGUAGE)

    class Config:
        frozen = True
        extra = "forbid"

    def with_tags(self, tags: List[str]) -> "AutodocConfig":
        return self.model_copy(update={"tags": list(tags)})


def _split_list(value: Any) -> Any:
    """Accepts ``'a,b'`` as well as ``['a', 'b']`` for list options."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def load_config(
    config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> AutodocConfig:
    """
    Load configuration from file and overrides.

    Priority:
    1. CLI Arguments (if provided and not None)
    2. Config File (if provided or found at default path)
    3. Default Values

    Args:
        config_path: Path to the YAML config file. If None, tries 'docflow.config.yaml'.
        cli_args: Dictionary of CLI arguments to override config values.

    Returns:
        AutodocConfig: The resolved configuration object.

    Raises:
        ConfigurationError: if the merged values do not validate.
    """
    config_data: Dict[str, Any] = {}

    target_path = config_path if config_path else DEFAULT_CONFIG_PATH
    path_obj = Path(target_path)

    if path_obj.exists() and path_obj.is_file():
        try:
            with open(path_obj, 'r', encoding='utf-8') as f:
                file_data = yaml.safe_load(f)
                if file_data:
                    config_data.update(file_data)
            logging.info(f"Loaded configuration from {target_path}")
        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load config file {target_path}: {e}")
    elif config_path:
        logging.warning(f"Config file not found at explicit path: {config_path}")
    else:
        logging.info(f"No config file found at {DEFAULT_CONFIG_PATH}, using defaults.")

    if cli_args:
        for key, value in cli_args.items():
            if value is not None:
                config_data[key] = value

    for key in ("namespaces", "tags"):
        if key in config_data:
            config_data[key] = _split_list(config_data[key])

    language = config_data.get("language", DEFAULT_LANGUAGE)
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigurationError(f"Unsupported language: {language}")

    try:
        return AutodocConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
