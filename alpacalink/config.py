"""
alpacalink Configuration

Pydantic models describing how to reach an Alpaca server, loaded from YAML
with environment variable overrides.

Lookup order for load_config() without an explicit path:
    ./alpacalink.yaml
    ~/.alpacalink/config.yaml
    /etc/alpacalink/config.yaml

Environment overrides use ALPACALINK_<SECTION>_<KEY>, e.g.
ALPACALINK_CLIENT_PORT=11111, or ALPACALINK_<KEY> for top-level keys such
as ALPACALINK_LOG_LEVEL=DEBUG. Environment values win over file values.
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from alpacalink.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ALPACALINK_"
UINT32_MAX = 2**32 - 1


class ClientConfig(BaseModel):
    """Connection target and behaviour of one AlpacaClient."""

    client_id: int = Field(default=1, ge=0, le=UINT32_MAX)
    secure: bool = False
    domain: str = ""
    ip: str = ""
    port: int = -1
    transaction_id: int = Field(default=0, ge=0, le=UINT32_MAX)
    timeout: float = Field(default=10.0, gt=0.0, le=300.0)
    raise_on_error: bool = False

    @field_validator("port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        if value != -1 and not 1 <= value <= 65535:
            raise ValueError("port must be -1 (unused) or 1-65535")
        return value


class AlpacaLinkConfig(BaseModel):
    """Top-level configuration."""

    client: ClientConfig = Field(default_factory=ClientConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None


def get_config_paths() -> list[Path]:
    """Candidate config file locations, highest priority first."""
    return [
        Path("./alpacalink.yaml"),
        Path.home() / ".alpacalink" / "config.yaml",
        Path("/etc/alpacalink/config.yaml"),
    ]


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Merge ALPACALINK_* environment variables into raw config data.

    Values stay strings; pydantic coerces them to the field types.
    """
    sections = {
        name for name, field in AlpacaLinkConfig.model_fields.items()
        if isinstance(field.annotation, type) and issubclass(field.annotation, BaseModel)
    }

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()

        section = next((s for s in sections if name.startswith(f"{s}_")), None)
        if section is not None:
            field_name = name[len(section) + 1:]
            section_data = data.get(section) or {}
            if isinstance(section_data, dict):
                section_data[field_name] = value
                data[section] = section_data
        elif name in AlpacaLinkConfig.model_fields:
            data[name] = value.upper() if name == "log_level" else value
        else:
            continue
        logger.debug(f"Config override from environment: {key}")

    return data


def load_config(path: Optional[str | Path] = None) -> AlpacaLinkConfig:
    """
    Load configuration from YAML and the environment.

    Args:
        path: Explicit config file. When omitted the first existing file
              from get_config_paths() is used, or defaults if none exist.

    Returns:
        Validated AlpacaLinkConfig

    Raises:
        ConfigurationError: File missing, invalid YAML, or invalid values
    """
    data: dict[str, Any] = {}
    config_file: Optional[Path] = None

    if path is not None:
        config_file = Path(path)
        if not config_file.exists():
            raise ConfigurationError(
                f"Config file not found: {config_file}",
                config_file=str(config_file),
            )
    else:
        config_file = next((p for p in get_config_paths() if p.exists()), None)

    if config_file is not None:
        try:
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in config file: {e}",
                config_file=str(config_file),
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Invalid YAML in config file: top level must be a mapping",
                config_file=str(config_file),
            )
        logger.info(f"Loaded configuration from {config_file}")

    data = _apply_env_overrides(data)

    try:
        return AlpacaLinkConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            config_file=str(config_file) if config_file else None,
        ) from e
