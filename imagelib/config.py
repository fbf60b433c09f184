"""
Configuration for imagelib.

Settings are pydantic models grouped by concern. get_settings() builds them
once from IMAGELIB_* environment variables, for example:

    IMAGELIB_SYSTEM__LOG_LEVEL=DEBUG
    IMAGELIB_CODEC__JPEG_QUALITY=85
    IMAGELIB_TRANSFORM__SHRINK_INTERPOLATION=lanczos
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from imagelib.constants import CodecConstants, SystemConstants

logger = logging.getLogger(__name__)

Interpolation = Literal["nearest", "linear", "area", "cubic", "lanczos"]


class CodecSettings(BaseModel):
    """Encoder defaults. The defaults favour fidelity over file size."""

    model_config = ConfigDict(extra="forbid")

    jpeg_quality: int = Field(
        default=CodecConstants.DEFAULT_JPEG_QUALITY,
        ge=CodecConstants.MIN_QUALITY,
        le=CodecConstants.MAX_QUALITY,
        description="JPEG quality (1-100)",
    )
    webp_quality: int = Field(
        default=CodecConstants.DEFAULT_WEBP_QUALITY,
        ge=CodecConstants.MIN_QUALITY,
        le=CodecConstants.MAX_QUALITY,
        description="WebP quality (1-100)",
    )
    png_compress_level: int = Field(
        default=CodecConstants.DEFAULT_PNG_COMPRESS_LEVEL,
        ge=CodecConstants.MIN_PNG_COMPRESS_LEVEL,
        le=CodecConstants.MAX_PNG_COMPRESS_LEVEL,
        description="PNG zlib compression level (0 = none)",
    )


class TransformSettings(BaseModel):
    """Resampling behaviour."""

    model_config = ConfigDict(extra="forbid")

    shrink_interpolation: Interpolation = Field(
        default="area", description="Interpolation used when a scale reduces size"
    )
    enlarge_interpolation: Interpolation = Field(
        default="cubic", description="Interpolation used when a scale increases size"
    )


class SystemSettings(BaseModel):
    """Logging and debug switches."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT)
    debug: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseModel):
    """Top-level settings container."""

    model_config = ConfigDict(extra="forbid")

    environment: str = Field(default="production")
    codec: CodecSettings = Field(default_factory=CodecSettings)
    transform: TransformSettings = Field(default_factory=TransformSettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Export settings as a plain dictionary."""
        return self.model_dump()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Variables are named IMAGELIB_<SECTION>__<FIELD>; IMAGELIB_ENVIRONMENT
        sets the top-level environment name. Values are coerced by pydantic.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Validated Settings instance
        """
        environ = os.environ if environ is None else environ
        prefix = SystemConstants.ENV_PREFIX
        data: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(prefix):
                continue

            name = key[len(prefix) :].lower()
            if name == "environment":
                data["environment"] = value
                continue

            section, sep, field = name.partition(SystemConstants.ENV_NESTED_DELIMITER)
            if not sep or not field:
                logger.warning(f"Ignoring malformed setting variable: {key}")
                continue

            data.setdefault(section, {})[field] = value

        return cls.model_validate(data)


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings (built once from the environment)."""
    return Settings.from_env()


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logging for applications embedding imagelib.

    The library never calls this itself; it only emits through module loggers.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.system.log_level),
        format=SystemConstants.LOG_FORMAT,
    )
    if settings.system.debug:
        logging.getLogger("imagelib").setLevel(logging.DEBUG)
