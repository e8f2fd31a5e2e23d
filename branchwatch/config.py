"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and BRANCHWATCH_* environment variables.

Examples
--------
Override via environment::

    export BRANCHWATCH_LOG_LEVEL=DEBUG
    export BRANCHWATCH_REMOTE_NAME=upstream
    export BRANCHWATCH_BUILD_HISTORY_URL=https://pnc.example.com
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from branchwatch.core.url_normalizer import DEFAULT_GATEWAY_SEGMENT, DEFAULT_SSH_SCHEME


class ConfigMissingError(RuntimeError):
    """Raised when a required configuration value is missing or malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"ConfigMissingError: {reason}")


def validate_url(url: str | None, kind: str) -> str:
    """Check that *url* is set and carries both a scheme and a host.

    Returns the URL unchanged so it can be used inline.  Raises
    ``ConfigMissingError`` naming *kind* (e.g. ``"Build history"``) otherwise.
    """
    if not url:
        raise ConfigMissingError(f"{kind} Url is not specified in the config")

    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as exc:
        raise ConfigMissingError(f"Could not parse the {kind} Url at all! {exc}") from exc

    if not parts.scheme:
        raise ConfigMissingError(f"You need to specify the protocol of the {kind} URL")
    if not host:
        raise ConfigMissingError(f"You need to specify the host of the {kind} URL")
    return url


class BranchwatchConfig(BaseSettings):
    """Branchwatch settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BRANCHWATCH_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Clone behaviour
    remote_name: str = "prod"
    workspace_prefix: str = "git"
    workspace_root: Path | None = None
    ssl_verify: bool = False

    # Internal -> anonymous URL rewriting
    ssh_scheme: str = DEFAULT_SSH_SCHEME
    gateway_segment: str = DEFAULT_GATEWAY_SEGMENT

    # Build history service
    build_history_url: str = ""
    build_history_timeout_seconds: float = 30.0

    @field_validator("build_history_url")
    @classmethod
    def _check_build_history_url(cls, value: str) -> str:
        if value:
            validate_url(value, "Build history")
        return value
