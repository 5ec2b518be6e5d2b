"""
xplot configuration models.

Parses xplot.toml and provides typed defaults for sampling and display.

Example xplot.toml:

    [sampling]
    x_min = -10.0
    x_max = 10.0
    step = 0.01

    [display]
    precision = 6
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from xplot.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "xplot.toml"


class SamplingConfig(BaseModel):
    """Default x-range and resolution for sampling."""

    model_config = ConfigDict(extra="forbid")

    x_min: float = -10.0
    x_max: float = 10.0
    step: float = Field(default=0.01, gt=0)

    @model_validator(mode="after")
    def _check_range(self) -> SamplingConfig:
        if self.x_min > self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must not exceed x_max ({self.x_max})")
        return self


class DisplayConfig(BaseModel):
    """Output formatting for the command line."""

    model_config = ConfigDict(extra="forbid")

    precision: int = Field(default=6, ge=0, le=17)


class XplotConfig(BaseModel):
    """Complete xplot configuration."""

    model_config = ConfigDict(extra="forbid")

    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def load_config(toml_path: Path) -> XplotConfig:
    """
    Load configuration from an xplot.toml file.

    Args:
        toml_path: Path to xplot.toml

    Returns:
        XplotConfig with parsed values, or defaults if the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    if not toml_path.exists():
        return XplotConfig()

    try:
        with open(toml_path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    try:
        config = XplotConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {toml_path}:\n{e}") from e

    logger.info("Loaded configuration from %s", toml_path)
    return config


def find_config(project_root: Path) -> XplotConfig:
    """Load xplot.toml from project_root, falling back to defaults."""
    return load_config(project_root / CONFIG_FILENAME)
