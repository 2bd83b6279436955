"""Okteto REST API adapter for namespace and application listing."""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, TypeVar
from urllib.parse import quote

import httpx

from redeployer.domain import UNKNOWN_LAST_UPDATED, Application, Namespace, domain_parse_timestamp

from .interfaces import OktetoApiPort
from .okteto_errors import (
    OktetoApiAuthenticationError,
    OktetoApiConnectionError,
    OktetoApiPaginationError,
    OktetoApiResponseError,
    OktetoApiTimeoutError,
)

logger = logging.getLogger(__name__)

_RecordT = TypeVar("_RecordT")


class OktetoApiAdapter(OktetoApiPort):
    """Adapter for the paginated Okteto `namespaces` and `applications` endpoints.

    One pooled HTTP client is reused for every request; call `adapter_close`
    or use the adapter as a context manager to release it.
    """

    _USER_AGENT: Final[str] = "redeploy-all-applications/1.0 (Python/httpx)"
    _NAMESPACES_PATH: Final[str] = "/api/v0/namespaces"
    _AUTHENTICATION_STATUS_CODES: Final[frozenset[int]] = frozenset({401, 403})

    def __init__(
        self,
        host: str,
        token: str,
        page_size: int = 100,
        max_pages: int = 1000,
        request_timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize Okteto API adapter.

        Args:
            host: Okteto instance `host[:port]`.
            token: Okteto API bearer token.
            page_size: Number of records requested per page.
            max_pages: Maximum pages fetched per listing.
            request_timeout_seconds: HTTP request timeout in seconds.
            transport: Optional httpx transport override.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_host = host.strip().rstrip("/")
        normalized_token = token.strip()

        if not normalized_host:
            raise ValueError("host must not be blank")
        if not normalized_token:
            raise ValueError("token must not be blank")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._page_size = page_size
        self._max_pages = max_pages
        self._client = httpx.Client(
            base_url=f"https://{normalized_host}",
            headers={
                "Authorization": f"Bearer {normalized_token}",
                "Accept": "application/json",
                "User-Agent": self._USER_AGENT,
            },
            timeout=httpx.Timeout(request_timeout_seconds),
            transport=transport,
        )

    def __enter__(self) -> OktetoApiAdapter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.adapter_close()

    def adapter_close(self) -> None:
        """Close the pooled HTTP client.

        Returns:
            None: Releases transport resources as side effect.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        self._client.close()

    def adapter_list_namespaces(self) -> list[Namespace]:
        """Fetch every namespace visible to the configured token.

        Returns:
            list[Namespace]: Namespaces in API order.

        Raises:
            OktetoApiConnectionError: Raised for network failures.
            OktetoApiTimeoutError: Raised when a request times out.
            OktetoApiResponseError: Raised for error statuses and invalid payloads.
        """

        return self._adapter_list_paginated(
            path=self._NAMESPACES_PATH,
            record_parser=self._adapter_parse_namespace,
        )

    def adapter_list_applications(self, namespace_name: str) -> list[Application]:
        """Fetch every application deployed within one namespace.

        Args:
            namespace_name: Namespace to list.

        Returns:
            list[Application]: Applications in API order.

        Raises:
            ValueError: Raised when namespace name is blank.
            OktetoApiConnectionError: Raised for network failures.
            OktetoApiTimeoutError: Raised when a request times out.
            OktetoApiResponseError: Raised for error statuses and invalid payloads.
        """

        normalized_namespace_name = namespace_name.strip()
        if not normalized_namespace_name:
            raise ValueError("namespace_name must not be blank")

        return self._adapter_list_paginated(
            path=f"{self._NAMESPACES_PATH}/{quote(normalized_namespace_name, safe='')}/applications",
            record_parser=self._adapter_parse_application,
        )

    def _adapter_list_paginated(
        self,
        path: str,
        record_parser: Callable[[dict[str, Any]], _RecordT],
    ) -> list[_RecordT]:
        """Fetch pages with `limit`/`offset` until the API runs out of records.

        A page that is empty or shorter than the requested limit ends the listing.

        Args:
            path: Endpoint path relative to the Okteto host.
            record_parser: Converter from one JSON record to a domain model.

        Returns:
            list: Parsed records across all pages, in API order.

        Raises:
            OktetoApiPaginationError: Raised when the page limit is exhausted.
            OktetoApiResponseError: Raised for error statuses and invalid payloads.
        """

        records: list[_RecordT] = []
        for page_index in range(self._max_pages):
            page_items = self._adapter_get_page_items(
                path=path,
                query_parameters={"limit": self._page_size, "offset": page_index * self._page_size},
            )
            records.extend(record_parser(item) for item in page_items)
            logger.debug("Fetched page %d of %s with %d records", page_index + 1, path, len(page_items))
            if len(page_items) < self._page_size:
                return records

        raise OktetoApiPaginationError(f"Okteto listing for {path} did not finish after {self._max_pages} pages")

    def _adapter_get_page_items(self, path: str, query_parameters: dict[str, int]) -> list[dict[str, Any]]:
        """Execute one HTTP GET and return the records of that page.

        Args:
            path: Endpoint path.
            query_parameters: Pagination query parameters.

        Returns:
            list[dict[str, Any]]: Raw JSON records.

        Raises:
            OktetoApiConnectionError: Raised for network failures.
            OktetoApiTimeoutError: Raised when the request times out.
            OktetoApiAuthenticationError: Raised when the token is rejected.
            OktetoApiResponseError: Raised for other error statuses and invalid payloads.
        """

        try:
            response = self._client.get(path, params=query_parameters)
        except httpx.TimeoutException as error:
            raise OktetoApiTimeoutError(f"Okteto request to {path} timed out") from error
        except httpx.TransportError as error:
            raise OktetoApiConnectionError(f"Okteto request to {path} failed: {error}") from error

        if response.status_code in self._AUTHENTICATION_STATUS_CODES:
            raise OktetoApiAuthenticationError(
                f"Okteto rejected the token with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            raise OktetoApiResponseError(
                f"Okteto returned HTTP {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as error:
            raise OktetoApiResponseError(f"Okteto returned a non-JSON payload for {path}") from error

        if isinstance(payload, dict):
            payload = payload.get("items")
        if not isinstance(payload, list):
            raise OktetoApiResponseError(f"Okteto payload for {path} is not a list of records")
        for item in payload:
            if not isinstance(item, dict):
                raise OktetoApiResponseError(f"Okteto payload for {path} contains a non-object record")
        return payload

    def _adapter_parse_namespace(self, record: dict[str, Any]) -> Namespace:
        """Convert one namespace record into a domain model.

        Args:
            record: Raw JSON record.

        Returns:
            Namespace: Parsed namespace.

        Raises:
            OktetoApiResponseError: Raised when the record has no name.
        """

        return Namespace(
            name=self._adapter_required_text(record, "name", record_kind="namespace"),
            status=str(record.get("status") or ""),
        )

    def _adapter_parse_application(self, record: dict[str, Any]) -> Application:
        """Convert one application record into a domain model.

        An absent or null `lastUpdated` maps to `UNKNOWN_LAST_UPDATED`, so the
        application always counts as stale.

        Args:
            record: Raw JSON record.

        Returns:
            Application: Parsed application.

        Raises:
            OktetoApiResponseError: Raised when name is missing, `lastUpdated` is malformed,
                or `repository`/`branch` are not strings.
        """

        application_name = self._adapter_required_text(record, "name", record_kind="application")
        last_updated_value = record.get("lastUpdated")
        if last_updated_value is None:
            last_updated = UNKNOWN_LAST_UPDATED
        else:
            if not isinstance(last_updated_value, str):
                raise OktetoApiResponseError(
                    f"Okteto application {application_name!r} has invalid lastUpdated {last_updated_value!r}"
                )
            try:
                last_updated = domain_parse_timestamp(last_updated_value)
            except ValueError as error:
                raise OktetoApiResponseError(
                    f"Okteto application {application_name!r} has invalid lastUpdated {last_updated_value!r}"
                ) from error

        return Application(
            name=application_name,
            repository=self._adapter_optional_text(record, "repository", application_name),
            branch=self._adapter_optional_text(record, "branch", application_name),
            last_updated=last_updated,
        )

    def _adapter_optional_text(self, record: dict[str, Any], key: str, application_name: str) -> str | None:
        """Read an optional string field of one application record.

        Args:
            record: Raw JSON record.
            key: Field name.
            application_name: Application name used in error messages.

        Returns:
            str | None: Field value, or None when absent, null or empty.

        Raises:
            OktetoApiResponseError: Raised when the value is present but not a string.
        """

        value = record.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise OktetoApiResponseError(f"Okteto application {application_name!r} has non-text {key} {value!r}")
        return value or None

    def _adapter_required_text(self, record: dict[str, Any], key: str, record_kind: str) -> str:
        value = record.get(key)
        if not isinstance(value, str) or not value.strip():
            raise OktetoApiResponseError(f"Okteto {record_kind} record is missing {key!r}")
        return value.strip()
