"""Application bootstrap wiring for dependency assembly."""

from __future__ import annotations

from redeployer.adapters import OktetoApiAdapter, OktetoApiPort, OktetoCliAdapter
from redeployer.config import AppSettings
from redeployer.jobs import RedeployJobOrchestrator, RedeployOrchestratorConfig


def bootstrap_create_api_adapter(settings: AppSettings) -> OktetoApiAdapter:
    """Build the Okteto API adapter from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        OktetoApiAdapter: Adapter owning one pooled HTTP client; the caller closes it.

    Raises:
        ValueError: Raised when adapter configuration is invalid.
    """

    return OktetoApiAdapter(
        host=settings.okteto_host,
        token=settings.okteto_token,
        page_size=settings.okteto_api_page_size,
        max_pages=settings.okteto_api_max_pages,
        request_timeout_seconds=settings.okteto_request_timeout_seconds,
    )


def bootstrap_create_redeploy_orchestrator(
    settings: AppSettings,
    api_adapter: OktetoApiPort,
) -> RedeployJobOrchestrator:
    """Build redeploy orchestrator for the command-line trigger surface.

    Args:
        settings: Validated runtime settings.
        api_adapter: Adapter listing namespaces and applications.

    Returns:
        RedeployJobOrchestrator: Fully wired redeploy orchestrator instance.

    Raises:
        ValueError: Raised when orchestrator configuration is invalid.
    """

    return RedeployJobOrchestrator(
        api_adapter=api_adapter,
        cli_adapter=OktetoCliAdapter(executable=settings.okteto_cli_executable),
        config=RedeployOrchestratorConfig(
            threshold=settings.threshold,
            dry_run=settings.dry_run,
            ignore_sleeping_namespaces=settings.ignore_sleeping_namespaces,
            restore_original_namespace_status=settings.restore_original_namespace_status,
            wait_for_deployment=settings.wait_for_deployment,
        ),
    )
