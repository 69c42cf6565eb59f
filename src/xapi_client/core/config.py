"""Configuration management.

``LRSConfig`` is the in-process connection configuration held by a client.
``Settings`` loads it (plus logging options) from a TOML config file and
environment variables, using pydantic-settings for validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .enums import DEFAULT_VERSION
from .errors import ConfigurationError

STATEMENTS_PATH = "statements"


def normalize_endpoint(endpoint: str) -> str:
    """Guarantee exactly one trailing ``/`` on a non-empty endpoint."""
    if not endpoint:
        return ""
    return endpoint.rstrip("/") + "/"


# ---------------------------------------------------------------------------
# Connection config
# ---------------------------------------------------------------------------

class LRSConfig(BaseModel):
    """LRS endpoint and credentials.

    Replaced in full by every ``configure()`` call, never merged.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = ""
    username: str = ""
    password: str = Field(default="", repr=False)
    version: str = DEFAULT_VERSION

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, v: str) -> str:
        return normalize_endpoint(v)

    @property
    def is_complete(self) -> bool:
        return bool(self.endpoint and self.username and self.password)

    @property
    def statements_url(self) -> str:
        return self.endpoint + STATEMENTS_PATH

    def require_complete(self) -> None:
        """Raise ``ConfigurationError`` unless endpoint and credentials are set."""
        if not self.is_complete:
            raise ConfigurationError(
                "xAPI not configured. Call configure() with an endpoint, "
                "username and password first."
            )


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level client settings.

    Environment variables (``XAPI_LRS__ENDPOINT``, ``XAPI_LRS__USERNAME``,
    ...) fill in whatever the TOML file and explicit overrides leave unset.
    """

    lrs: LRSConfig = Field(default_factory=LRSConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    timeout: float | None = None  # seconds; None disables the HTTP timeout

    model_config = {"env_prefix": "XAPI_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        import tomli

        with open(path, "rb") as f:
            try:
                data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc
