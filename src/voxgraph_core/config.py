"""
Configuration Management for Voxgraph.

Type-safe configuration loading using Pydantic Settings. Values come from
environment variables, a .env file, or the defaults below.

License: MIT
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class VoxgraphSettings(BaseSettings):
    """
    Centralized configuration for Voxgraph.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables
    2. .env file in the working directory
    3. Hardcoded default values

    Example:
        ```python
        from voxgraph_core.config import settings

        print(settings.log_level)  # 'INFO'
        print(settings.extract_interim_results)  # False
        ```
    """

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="json", description="Log format (json, console)")

    # ========================================
    # EXTRACTION CONFIGURATION
    # ========================================

    extract_interim_results: bool = Field(
        default=False,
        description="Feed interim (non-final) speech results to entity extraction",
    )

    relationship_confidence: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Confidence assigned to pattern relationships"
    )

    max_text_length: int = Field(
        default=100_000,
        ge=1,
        description="Transcript chunks longer than this are truncated before extraction",
    )

    # ========================================
    # EXPORT CONFIGURATION
    # ========================================

    export_pretty_print: bool = Field(
        default=True, description="Indent exported JSON and GraphML files"
    )

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    # ========================================
    # COMPUTED PROPERTIES
    # ========================================

    @property
    def is_development(self) -> bool:
        """True if log_level is DEBUG."""
        return self.log_level == "DEBUG"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "forbid",
    }


def get_config_summary(settings: VoxgraphSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: VoxgraphSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "extraction": {
            "extract_interim_results": settings.extract_interim_results,
            "relationship_confidence": settings.relationship_confidence,
            "max_text_length": settings.max_text_length,
        },
        "export": {
            "pretty_print": settings.export_pretty_print,
        },
    }


# Singleton instance - instantiated once at module import
settings = VoxgraphSettings()
