"""
Engine Configuration

Defaults for the predictive maintenance engine, overlaid from environment
variables after an optional .env file has been loaded.
"""

import os
from datetime import datetime, timezone
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from pm_engine.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EngineSettings(BaseModel):
    """Tunable engine settings."""
    analysis_version: str = Field("2.1.0", description="Version stamped on every Analysis")
    next_analysis_hours: int = Field(24, ge=1, description="Hours until the next analysis is recommended")
    currency: str = Field("USD", min_length=3, max_length=3, description="ISO currency for cost estimates")
    high_probability_threshold: float = Field(
        0.5, ge=0.0, le=1.0,
        description="Failure-mode probability above which an item is escalated to critical"
    )
    log_level: str = Field("INFO", description="Root log level for entry points")


# Environment variable -> (settings field, parser)
_ENV_OVERRIDES = {
    "PM_ANALYSIS_VERSION": ("analysis_version", str),
    "PM_NEXT_ANALYSIS_HOURS": ("next_analysis_hours", int),
    "PM_CURRENCY": ("currency", str),
    "PM_HIGH_PROBABILITY_THRESHOLD": ("high_probability_threshold", float),
    "PM_LOG_LEVEL": ("log_level", str),
}


def load_settings(env_path: Optional[str] = None) -> EngineSettings:
    """
    Build settings from defaults, a .env file and the process environment.

    Args:
        env_path: Path to a .env file (defaults to .env beside this package)

    Returns:
        EngineSettings

    Raises:
        ConfigurationError: If an override cannot be parsed or is out of range
    """
    if env_path is None:
        env_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")
    load_dotenv(env_path)

    overrides = {}
    for env_name, (field_name, parser) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = parser(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {env_name}: {raw!r}") from e

    try:
        settings = EngineSettings(**overrides)
    except ValueError as e:
        raise ConfigurationError(f"Invalid engine settings: {e}") from e

    if overrides:
        logger.info(f"Settings overridden from environment: {sorted(overrides)}")
    return settings


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line entry points."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def utc_now() -> datetime:
    """Default engine clock."""
    return datetime.now(timezone.utc)
