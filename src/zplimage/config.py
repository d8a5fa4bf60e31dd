"""Configuration management for zplimage."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConversionOptions(BaseModel):
    """Options for converting an image to a ZPL graphic field."""

    # Z64 (zlib + base64) when True, B64 (base64 only) when False
    use_compression: bool = True
    origin_x: int = Field(default=0, ge=0)
    origin_y: int = Field(default=0, ge=0)
    # Optional resize target in dots; one side alone keeps the aspect ratio
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    # Luminance below threshold prints black
    threshold: int = Field(default=128, ge=0, le=255)
    dither: bool = False
    # Flip polarity for sources that come out inverted
    invert: bool = False


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZPLIMAGE_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("zplimage.yaml")
    debug: bool = False


def load_config(config_path: Path) -> ConversionOptions:
    """Load conversion options from a YAML file.

    A missing or empty file yields the defaults.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If an option has an invalid value.
    """
    if not config_path.exists():
        logger.debug(f"Config file {config_path} not found, using defaults")
        return ConversionOptions()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return ConversionOptions.model_validate(data)


# Global settings instance
settings = Settings()
