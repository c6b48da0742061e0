"""
Centralized configuration for datalayer.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (DATALAYER_*)
3. .env file
4. Default values

Example:
    from datalayer.config import get_config

    config = get_config()
    print(config.storage_type)  # From DATALAYER_STORAGE_TYPE or default

    # Override at runtime
    config = get_config(storage_type="slot", seed_records=["Jane", "John"])
"""

from __future__ import annotations

import logging
import sys
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataLayerConfig(BaseSettings):
    """
    Central configuration for datalayer.

    All settings can be overridden via environment variables
    prefixed with DATALAYER_.

    Example:
        export DATALAYER_STORAGE_TYPE=slot
        export DATALAYER_SEED_RECORDS='["Jane", "John"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="DATALAYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = Field(
        default="datalayer",
        description="Service name for audit log attribution",
    )

    # Storage backend
    storage_type: Literal["memory", "slot", "readonly"] = Field(
        default="memory",
        description="Storage backend wired by the composition root",
    )
    seed_records: List[str] = Field(
        default_factory=list,
        description="Values loaded into the backend at construction",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for datalayer",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shippers, text for console)",
    )
    audit_enabled: bool = Field(
        default=True,
        description="Emit structured audit events for consumer operations",
    )


# Global singleton
_config: Optional[DataLayerConfig] = None


def get_config(**overrides) -> DataLayerConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.
    """
    global _config

    if overrides or _config is None:
        _config = DataLayerConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: Optional[DataLayerConfig] = None) -> None:
    """Apply level and format from config to the ``datalayer`` loggers."""
    config = config or get_config()
    root = logging.getLogger("datalayer")
    root.setLevel(config.log_level.upper())
    logging.getLogger("datalayer.audit").setLevel(
        logging.DEBUG if config.log_level == "debug" else logging.INFO
    )

    if not any(getattr(h, "_datalayer", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler._datalayer = True
        root.addHandler(handler)

    fmt = "%(message)s" if config.log_format == "json" else _TEXT_FORMAT
    for handler in root.handlers:
        if getattr(handler, "_datalayer", False):
            handler.setFormatter(logging.Formatter(fmt))
