"""Adapter layer package for Okteto API and CLI integration boundaries."""

from .interfaces import OktetoApiPort, OktetoCliPort
from .okteto_api import OktetoApiAdapter
from .okteto_cli import DRY_RUN_MARKER, OktetoCliAdapter
from .okteto_errors import (
	OktetoAdapterError,
	OktetoApiAuthenticationError,
	OktetoApiConnectionError,
	OktetoApiPaginationError,
	OktetoApiResponseError,
	OktetoApiTimeoutError,
	OktetoCommandError,
)

__all__ = [
	"DRY_RUN_MARKER",
	"OktetoAdapterError",
	"OktetoApiAdapter",
	"OktetoApiAuthenticationError",
	"OktetoApiConnectionError",
	"OktetoApiPaginationError",
	"OktetoApiPort",
	"OktetoApiResponseError",
	"OktetoApiTimeoutError",
	"OktetoCliAdapter",
	"OktetoCliPort",
	"OktetoCommandError",
]
