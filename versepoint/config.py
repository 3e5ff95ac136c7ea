"""Client configuration with environment variable loading.

Pydantic-based configuration for the backend connection, default model,
preference storage location and logging.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from versepoint.models.catalog import DEFAULT_MODEL_ID, get_model

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ClientConfig(BaseModel):
    """Configuration for the Verse Point client.

    Attributes:
        api_base_url: Backend base URL, including the ``/api`` prefix.
        request_timeout: Per-request timeout in seconds.
        default_model: Catalog id used when no preference selects a model.
        preferences_path: JSON file holding persisted preferences.
        log_level: Root logging level name.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("VERSEPOINT_API_BASE_URL", "http://localhost:5001/api"),
        description="Backend API base URL",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("VERSEPOINT_REQUEST_TIMEOUT", "30")),
        gt=0.0,
        le=600.0,
        description="Per-request timeout in seconds",
    )
    default_model: str = Field(
        default_factory=lambda: os.getenv("VERSEPOINT_DEFAULT_MODEL", DEFAULT_MODEL_ID),
        description="Default model id",
    )
    preferences_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("VERSEPOINT_PREFERENCES_PATH", "~/.versepoint/preferences.json")
        ).expanduser(),
        description="Where preferences are persisted",
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("VERSEPOINT_API_BASE_URL must be an http(s) URL")
        return v

    @field_validator("default_model")
    @classmethod
    def validate_default_model(cls, v: str) -> str:
        """Reject model ids outside the catalog."""
        if get_model(v) is None:
            raise ValueError(f"Unknown default model: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to an upper-case level name known to ``logging``."""
        v = v.strip().upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging to stdout.

    Has no effect when the root logger already has handlers, so a host
    application's own setup wins.

    Args:
        level: Level name. Falls back to ``LOG_LEVEL`` from the environment.
    """
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
