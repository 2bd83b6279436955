"""Project-native typed exceptions for Okteto API and CLI failures."""

from __future__ import annotations


class OktetoAdapterError(Exception):
    """Base exception for adapter-level Okteto failures."""


class OktetoApiConnectionError(OktetoAdapterError, ConnectionError):
    """Transport-level connectivity failure during Okteto API communication."""


class OktetoApiTimeoutError(OktetoAdapterError, TimeoutError):
    """Transport timeout while waiting for an Okteto API response."""


class OktetoApiResponseError(OktetoAdapterError, ValueError):
    """Unexpected HTTP status or payload returned by the Okteto API.

    Attributes:
        status_code: HTTP status code when the failure came from a response status.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OktetoApiAuthenticationError(OktetoApiResponseError):
    """Okteto API rejected the token (`401` or `403`)."""


class OktetoApiPaginationError(OktetoApiResponseError):
    """Listing did not terminate within the configured page limit."""


class OktetoCommandError(OktetoAdapterError, RuntimeError):
    """Okteto CLI command could not be started or exited with a non-zero status.

    Attributes:
        command: Display form of the failed command.
        exit_code: Process exit code, or None when the process never started.
        output: Combined stdout and stderr captured before the failure.
    """

    def __init__(self, message: str, command: str, exit_code: int | None = None, output: str = ""):
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.output = output
