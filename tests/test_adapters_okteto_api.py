"""Regression tests for Okteto API adapter pagination and error mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from redeployer.adapters import (
    OktetoApiAdapter,
    OktetoApiAuthenticationError,
    OktetoApiConnectionError,
    OktetoApiPaginationError,
    OktetoApiResponseError,
    OktetoApiTimeoutError,
)
from redeployer.domain import UNKNOWN_LAST_UPDATED


def _build_adapter(
    handler: Callable[[httpx.Request], httpx.Response],
    page_size: int = 2,
    max_pages: int = 10,
) -> OktetoApiAdapter:
    return OktetoApiAdapter(
        host="okteto.example.com",
        token="secret-token",
        page_size=page_size,
        max_pages=max_pages,
        transport=httpx.MockTransport(handler),
    )


def test_adapters_okteto_api_lists_namespaces_across_pages() -> None:
    """Follow offset pagination until a short page is returned.

    Returns:
        None: Assertions validate pagination and request shape.

    Raises:
        AssertionError: Raised when pages are skipped or requests are malformed.
    """

    pages = [
        [{"name": "team-a", "status": "Active"}, {"name": "team-b", "status": "Sleeping"}],
        [{"name": "team-c", "status": "Inactive"}],
    ]
    captured_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(200, json=pages[len(captured_requests) - 1])

    with _build_adapter(_handler) as adapter:
        namespaces = adapter.adapter_list_namespaces()

    assert [namespace.name for namespace in namespaces] == ["team-a", "team-b", "team-c"]
    assert namespaces[1].namespace_is_sleeping()
    assert len(captured_requests) == 2
    assert captured_requests[0].url.host == "okteto.example.com"
    assert captured_requests[0].url.path == "/api/v0/namespaces"
    assert captured_requests[0].url.params["limit"] == "2"
    assert captured_requests[0].url.params["offset"] == "0"
    assert captured_requests[1].url.params["offset"] == "2"
    assert captured_requests[0].headers["Authorization"] == "Bearer secret-token"


def test_adapters_okteto_api_stops_on_empty_page() -> None:
    """Stop listing when a full page is followed by an empty page.

    Returns:
        None: Assertions validate termination.
    """

    pages = [
        {"items": [{"name": "team-a", "status": "Active"}, {"name": "team-b", "status": "Active"}]},
        {"items": []},
    ]
    request_count = 0

    def _handler(request: httpx.Request) -> httpx.Response:
        nonlocal request_count
        _ = request
        request_count += 1
        return httpx.Response(200, json=pages[request_count - 1])

    with _build_adapter(_handler) as adapter:
        namespaces = adapter.adapter_list_namespaces()

    assert [namespace.name for namespace in namespaces] == ["team-a", "team-b"]
    assert request_count == 2


def test_adapters_okteto_api_lists_applications_of_namespace() -> None:
    """Parse application records from the namespace-scoped endpoint.

    Returns:
        None: Assertions validate endpoint path and record parsing.

    Raises:
        AssertionError: Raised when fields are not mapped to the domain model.
    """

    captured_paths: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_paths.append(request.url.path)
        return httpx.Response(
            200,
            json=[
                {
                    "name": "web",
                    "repository": "git@x/web",
                    "branch": "main",
                    "lastUpdated": "2024-05-01T10:00:00.123456789Z",
                },
                {"name": "worker", "lastUpdated": "2024-05-02T08:30:00Z"},
            ],
        )

    with _build_adapter(_handler, page_size=50) as adapter:
        applications = adapter.adapter_list_applications(namespace_name="team-a")

    assert captured_paths == ["/api/v0/namespaces/team-a/applications"]
    assert applications[0].name == "web"
    assert applications[0].repository == "git@x/web"
    assert applications[0].branch == "main"
    assert applications[0].last_updated == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
    assert applications[1].repository is None
    assert applications[1].branch is None
    assert not applications[1].application_has_repository()


def test_adapters_okteto_api_rejects_blank_namespace_name() -> None:
    """Refuse to list applications without a namespace name.

    Returns:
        None: Assertions validate argument validation.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request {request.url}")

    with _build_adapter(_handler) as adapter:
        with pytest.raises(ValueError, match="namespace_name must not be blank"):
            adapter.adapter_list_applications(namespace_name="  ")


@pytest.mark.parametrize("status_code", [401, 403])
def test_adapters_okteto_api_maps_rejected_token(status_code: int) -> None:
    """Raise authentication error when Okteto rejects the token.

    Args:
        status_code: Rejection status code.

    Returns:
        None: Assertions validate status mapping.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(status_code, json={"message": "unauthorized"})

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiAuthenticationError) as error_info:
            adapter.adapter_list_namespaces()

    assert error_info.value.status_code == status_code


def test_adapters_okteto_api_maps_server_error_status() -> None:
    """Raise typed response error carrying the HTTP status.

    Returns:
        None: Assertions validate status mapping.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(502, text="bad gateway")

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiResponseError, match="HTTP 502") as error_info:
            adapter.adapter_list_namespaces()

    assert error_info.value.status_code == 502
    assert isinstance(error_info.value, ValueError)


def test_adapters_okteto_api_maps_timeout() -> None:
    """Raise typed timeout error when the transport times out.

    Returns:
        None: Assertions validate timeout mapping.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiTimeoutError, match="timed out"):
            adapter.adapter_list_namespaces()


def test_adapters_okteto_api_maps_connection_failure() -> None:
    """Raise typed connection error for transport failures.

    Returns:
        None: Assertions validate connection error mapping.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiConnectionError) as error_info:
            adapter.adapter_list_namespaces()

    assert isinstance(error_info.value, ConnectionError)


@pytest.mark.parametrize(
    "response_factory",
    [
        lambda: httpx.Response(200, text="<html>not json</html>"),
        lambda: httpx.Response(200, json={"namespaces": []}),
        lambda: httpx.Response(200, json=["team-a"]),
        lambda: httpx.Response(200, json=[{"status": "Active"}]),
    ],
)
def test_adapters_okteto_api_rejects_invalid_payloads(response_factory: Callable[[], httpx.Response]) -> None:
    """Raise typed response error for payloads outside the listing contract.

    Args:
        response_factory: Builder for the invalid response.

    Returns:
        None: Assertions validate payload validation.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return response_factory()

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiResponseError):
            adapter.adapter_list_namespaces()


@pytest.mark.parametrize("last_updated_value", ["never", "", 1714557600])
def test_adapters_okteto_api_rejects_invalid_last_updated(last_updated_value: object) -> None:
    """Raise typed response error when an application timestamp is malformed.

    Args:
        last_updated_value: Malformed `lastUpdated` value.

    Returns:
        None: Assertions validate timestamp validation.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(
            200,
            json=[{"name": "web", "repository": "git@x/web", "lastUpdated": last_updated_value}],
        )

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiResponseError, match="invalid lastUpdated"):
            adapter.adapter_list_applications(namespace_name="team-a")


def test_adapters_okteto_api_missing_last_updated_maps_to_unknown_time() -> None:
    """Keep applications without `lastUpdated` next to well-formed siblings.

    Returns:
        None: Assertions validate the unknown timestamp mapping.

    Raises:
        AssertionError: Raised when the page is rejected or a record is dropped.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(
            200,
            json=[
                {"name": "web", "repository": "git@x/web", "lastUpdated": "2024-05-01T10:00:00Z"},
                {"name": "manual"},
                {"name": "cron", "repository": "git@x/cron", "lastUpdated": None},
            ],
        )

    with _build_adapter(_handler, page_size=50) as adapter:
        applications = adapter.adapter_list_applications(namespace_name="team-a")

    assert [application.name for application in applications] == ["web", "manual", "cron"]
    assert applications[0].last_updated == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert applications[1].last_updated == UNKNOWN_LAST_UPDATED
    assert applications[2].last_updated == UNKNOWN_LAST_UPDATED


@pytest.mark.parametrize(
    "record",
    [
        {"name": "web", "repository": 42, "lastUpdated": "2024-05-01T10:00:00Z"},
        {"name": "web", "repository": "git@x/web", "branch": ["main"], "lastUpdated": "2024-05-01T10:00:00Z"},
    ],
)
def test_adapters_okteto_api_rejects_non_text_repository_fields(record: dict[str, object]) -> None:
    """Raise typed response error when repository or branch is not a string.

    Args:
        record: Application record with a non-text source field.

    Returns:
        None: Assertions validate source field type checks.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json=[record])

    with _build_adapter(_handler) as adapter:
        with pytest.raises(OktetoApiResponseError, match="non-text"):
            adapter.adapter_list_applications(namespace_name="team-a")


def test_adapters_okteto_api_stops_after_max_pages() -> None:
    """Fail listing when the API keeps returning full pages.

    Returns:
        None: Assertions validate the pagination guard.
    """

    request_count = 0

    def _handler(request: httpx.Request) -> httpx.Response:
        nonlocal request_count
        _ = request
        request_count += 1
        return httpx.Response(200, json=[{"name": f"team-{request_count}", "status": "Active"}])

    with _build_adapter(_handler, page_size=1, max_pages=3) as adapter:
        with pytest.raises(OktetoApiPaginationError, match="3 pages"):
            adapter.adapter_list_namespaces()

    assert request_count == 3


def test_adapters_okteto_api_rejects_invalid_configuration() -> None:
    """Validate constructor arguments before creating the HTTP client.

    Returns:
        None: Assertions validate configuration checks.
    """

    with pytest.raises(ValueError, match="token must not be blank"):
        OktetoApiAdapter(host="okteto.example.com", token=" ")
    with pytest.raises(ValueError, match="host must not be blank"):
        OktetoApiAdapter(host="", token="secret-token")
    with pytest.raises(ValueError, match="page_size must be >= 1"):
        OktetoApiAdapter(host="okteto.example.com", token="secret-token", page_size=0)
