"""Configuration settings for the compatibility mapper.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via COMPATMAP_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class MapperSettings(BaseSettings):
    """Settings for a CompatibilityMapper."""

    # Raise CyclicConfigurationError instead of recursing forever
    detect_cycles: bool = True

    # Path syntax used by MovedFrom and depends_on
    path_separator: str = Field(default="/", min_length=1)
    parent_segment: str = Field(default="..", min_length=1)

    model_config = {"env_prefix": "COMPATMAP_"}
