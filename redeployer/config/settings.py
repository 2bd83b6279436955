"""Typed runtime settings with dotenv support and startup validation."""

from __future__ import annotations

from datetime import timedelta

import httpx
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redeployer.domain import domain_parse_duration

DEFAULT_OKTETO_THRESHOLD = "24h"
_LOG_LEVEL_NAMES = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Runtime settings for one redeploy run.

    Environment variable names map directly to field names in uppercase.
    Example: `okteto_token` reads from `OKTETO_TOKEN`. The Okteto context URL
    is read from `OKTETO_CONTEXT` and falls back to `OKTETO_URL` when the
    context is unset or blank.

    Attributes:
        okteto_token: Okteto API bearer token.
        okteto_context: Okteto instance URL, normalized to include a scheme.
        okteto_url: Fallback Okteto instance URL used when `okteto_context` is blank.
        okteto_threshold: Staleness threshold as a duration string (`24h`, `1h30m`).
        dry_run: Report commands instead of running them.
        ignore_sleeping_namespaces: Skip namespaces whose status is `Sleeping`.
        restore_original_namespace_status: Put sleeping namespaces back to sleep after redeploys.
        wait_for_deployment: Pass `--wait=true` to pipeline deploy commands.
        log_level: Root logger level name.
        okteto_cli_executable: Okteto CLI executable name or path.
        okteto_api_page_size: Page size requested from listing endpoints.
        okteto_api_max_pages: Maximum pages fetched per listing before giving up.
        okteto_request_timeout_seconds: HTTP request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    okteto_token: str = Field(default="")
    okteto_context: str = Field(default="")
    okteto_url: str = Field(default="")
    okteto_threshold: str = Field(default=DEFAULT_OKTETO_THRESHOLD)
    dry_run: bool = Field(default=False)
    ignore_sleeping_namespaces: bool = Field(default=False)
    restore_original_namespace_status: bool = Field(default=False)
    wait_for_deployment: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    okteto_cli_executable: str = Field(default="okteto", min_length=1)
    okteto_api_page_size: int = Field(default=100, ge=1)
    okteto_api_max_pages: int = Field(default=1000, ge=1)
    okteto_request_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("okteto_token", mode="before")
    @classmethod
    def _validate_token(cls, value: object) -> str:
        return str(value or "").strip()

    @field_validator("okteto_context", "okteto_url", mode="before")
    @classmethod
    def _validate_context_url(cls, value: object) -> str:
        raw_value = str(value or "").strip()
        if not raw_value:
            return ""

        normalized_value = raw_value if "://" in raw_value else f"https://{raw_value}"
        try:
            parsed_url = httpx.URL(normalized_value)
        except httpx.InvalidURL as error:
            raise ValueError(f"Invalid OKTETO_URL {raw_value!r}: {error}") from error
        if not parsed_url.host:
            raise ValueError(f"Invalid OKTETO_URL {raw_value!r}: missing host")
        return normalized_value

    @field_validator("okteto_threshold", mode="before")
    @classmethod
    def _validate_threshold(cls, value: object) -> str:
        raw_value = str(value or "").strip() or DEFAULT_OKTETO_THRESHOLD
        try:
            parsed_threshold = domain_parse_duration(raw_value)
        except ValueError as error:
            raise ValueError(f"Invalid OKTETO_THRESHOLD {error}") from error
        if parsed_threshold < timedelta(0):
            raise ValueError(f"Invalid OKTETO_THRESHOLD {raw_value!r}: must not be negative")
        return raw_value

    @field_validator(
        "dry_run",
        "ignore_sleeping_namespaces",
        "restore_original_namespace_status",
        "wait_for_deployment",
        mode="before",
    )
    @classmethod
    def _validate_enabled_flag(cls, value: object) -> bool:
        # Only the literal string "true" switches a flag on.
        if isinstance(value, bool):
            return value
        return str(value).strip() == "true"

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: object) -> str:
        normalized_value = str(value or "INFO").strip().upper()
        if normalized_value not in _LOG_LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVEL_NAMES)}")
        return normalized_value

    @model_validator(mode="after")
    def _validate_required_values(self) -> AppSettings:
        # A blank OKTETO_CONTEXT falls back to OKTETO_URL.
        if not self.okteto_context:
            self.okteto_context = self.okteto_url
        if not self.okteto_token or not self.okteto_context:
            raise ValueError("OKTETO_TOKEN, OKTETO_URL environment variables are required")
        return self

    @property
    def okteto_host(self) -> str:
        """Return the `host[:port]` part of the Okteto context URL.

        Returns:
            str: Host used to build API endpoint URLs.

        Raises:
            RuntimeError: This property does not raise runtime errors.
        """

        parsed_url = httpx.URL(self.okteto_context)
        if parsed_url.port is not None:
            return f"{parsed_url.host}:{parsed_url.port}"
        return parsed_url.host

    @property
    def threshold(self) -> timedelta:
        """Return the parsed staleness threshold.

        Returns:
            timedelta: Maximum age of an application before it is redeployed.

        Raises:
            RuntimeError: This property does not raise runtime errors.
        """

        return domain_parse_duration(self.okteto_threshold)

    def settings_describe(self) -> str:
        """Render the effective configuration for startup logging.

        The token is never included.

        Returns:
            str: Single-line `KEY=value` configuration summary.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return (
            f"OKTETO_CONTEXT={self.okteto_context} "
            f"OKTETO_THRESHOLD={self.okteto_threshold} "
            f"DRY_RUN={str(self.dry_run).lower()} "
            f"IGNORE_SLEEPING_NAMESPACES={str(self.ignore_sleeping_namespaces).lower()} "
            f"RESTORE_ORIGINAL_NAMESPACE_STATUS={str(self.restore_original_namespace_status).lower()} "
            f"WAIT_FOR_DEPLOYMENT={str(self.wait_for_deployment).lower()}"
        )


def config_load_settings(**overrides: object) -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Args:
        overrides: Optional explicit field values that take precedence over the environment.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings(**overrides)
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
