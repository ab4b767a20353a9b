"""Generation options and TOML configuration loading."""

import tomllib
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class GenerationOptions(BaseModel, frozen=True):
    """Tunables for a single ecosystem generation run."""

    elevation_density: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Fraction of cells seeded with high elevation"
    )
    elevation_iterations: int = Field(
        default=3, ge=0, description="Number of smoothing sweeps"
    )
    water_threshold: int = Field(
        default=80, ge=0, le=255, description="Cells at or below this elevation flood"
    )
    settlement_density: float = Field(
        default=0.02, ge=0.0, le=1.0, description="Fraction of suitable cells settled"
    )
    feature_density: float = Field(
        default=0.01, ge=0.0, le=1.0, description="Per-cell special feature probability"
    )
    seed: int | None = Field(
        default=None, description="Random seed (None = draw fresh entropy)"
    )


class EcosystemConfig(BaseModel):
    """Complete ecosystem configuration: grid shape plus generation options."""

    width: int = Field(default=64, gt=0, description="Grid width in cells")
    height: int = Field(default=64, gt=0, description="Grid height in cells")
    wrap: bool = Field(default=True, description="Toroidal edge wrapping")
    generation: GenerationOptions = Field(default_factory=GenerationOptions)


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail["loc"]) or "options"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def validate_options(
    options: GenerationOptions | Mapping[str, Any] | None = None,
) -> GenerationOptions:
    """Validate generation options.

    Args:
        options: Options model, plain mapping, or None for defaults.

    Returns:
        Validated GenerationOptions.

    Raises:
        ConfigurationError: If any value is outside its valid range.
    """
    if options is None:
        return GenerationOptions()
    if isinstance(options, GenerationOptions):
        return options
    try:
        return GenerationOptions.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid generation options: {_describe(e)}") from e


def load_config(config_path: Path) -> EcosystemConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed EcosystemConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        ConfigurationError: If any value is invalid.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    try:
        return EcosystemConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {config_path}: {_describe(e)}") from e
