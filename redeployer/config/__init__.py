"""Configuration package for runtime settings and startup validation."""

from .logging_setup import config_configure_logging
from .settings import DEFAULT_OKTETO_THRESHOLD, AppSettings, SettingsLoadError, config_load_settings

__all__ = [
	"AppSettings",
	"DEFAULT_OKTETO_THRESHOLD",
	"SettingsLoadError",
	"config_configure_logging",
	"config_load_settings",
]
