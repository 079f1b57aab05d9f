"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from newsfeed.utils.logging import get_logger

if TYPE_CHECKING:
    from newsfeed.models.config import PipelineConfig

logger = get_logger(__name__)

NEWSAPI_KEY_ENV = "NEWSAPI_API_KEY"
TRANSLATE_KEY_ENV = "GOOGLE_TRANSLATE_API_KEY"

T = TypeVar("T", bound=BaseModel)


def load_yaml_config(file_path: Path | str, model_class: type[T]) -> T:
    """
    Load and validate YAML configuration file.

    Args:
        file_path: Path to YAML configuration file
        model_class: Pydantic model class to validate against

    Returns:
        Validated configuration instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
        yaml.YAMLError: If YAML is malformed

    Examples:
        >>> from newsfeed.models.config import PipelineConfig
        >>> config = load_yaml_config("config/pipeline.yaml", PipelineConfig)
    """
    path = Path(file_path)

    if not path.exists():
        logger.error("Configuration file not found", path=str(path))
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

        config = model_class.model_validate(raw_config)
        logger.info("Configuration loaded", path=str(path), model=model_class.__name__)
        return config

    except yaml.YAMLError as e:
        logger.error("Invalid YAML syntax", path=str(path), error=str(e))
        raise

    except ValidationError as e:
        logger.error("Configuration validation failed", path=str(path), error=str(e))
        raise


def apply_env_secrets(config: "PipelineConfig") -> "PipelineConfig":
    """
    Fill API keys left empty in YAML from environment variables.

    Reads a ``.env`` file first when one is present. Values already set in the
    configuration win over the environment.

    Args:
        config: Loaded pipeline configuration

    Returns:
        The same configuration instance, updated in place
    """
    load_dotenv()

    if not config.news_api.api_key:
        config.news_api.api_key = os.getenv(NEWSAPI_KEY_ENV) or None
    if not config.translation.api_key:
        config.translation.api_key = os.getenv(TRANSLATE_KEY_ENV) or None

    return config


def load_pipeline_config(file_path: Path | str | None = "config/pipeline.yaml") -> "PipelineConfig":
    """
    Load pipeline configuration, falling back to defaults when the file is absent.

    Args:
        file_path: Path to pipeline.yaml file, or None for pure defaults

    Returns:
        PipelineConfig instance with secrets resolved
    """
    from newsfeed.models.config import PipelineConfig

    if file_path is None or not Path(file_path).exists():
        if file_path is not None:
            logger.warning(f"Config file {file_path} not found, using defaults")
        config = PipelineConfig()
    else:
        config = load_yaml_config(file_path, PipelineConfig)

    return apply_env_secrets(config)
