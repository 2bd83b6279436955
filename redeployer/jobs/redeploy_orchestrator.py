"""Job-layer orchestrator that redeploys stale Okteto applications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from typing import Callable, Final

from redeployer.adapters import OktetoApiPort, OktetoCliPort
from redeployer.domain import Application, Namespace

from .interfaces import JobExecutionResult, JobOrchestratorPort, RedeployRunSummary

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR: Final[str] = "-----------------------------------------------"
_RECOVERABLE_ERRORS: Final[tuple[type[Exception], ...]] = (TimeoutError, ConnectionError, ValueError, RuntimeError)


@dataclass(frozen=True)
class RedeployOrchestratorConfig:
    """Configuration values for redeploy orchestration execution.

    Attributes:
        threshold: Applications updated within this window are left alone.
        dry_run: Report commands instead of running them.
        ignore_sleeping_namespaces: Skip namespaces whose status is `Sleeping`.
        restore_original_namespace_status: Sleep originally sleeping namespaces after redeploys.
        wait_for_deployment: Ask the CLI to wait for each deployment to finish.
    """

    threshold: timedelta
    dry_run: bool = False
    ignore_sleeping_namespaces: bool = False
    restore_original_namespace_status: bool = False
    wait_for_deployment: bool = False


class RedeployJobOrchestrator(JobOrchestratorPort):
    """Concrete job orchestrator for the redeploy-all-applications workflow.

    Namespaces and their applications are processed strictly in API order on
    the calling thread. Only a namespace-listing failure fails the run;
    every other failure is logged and processing continues.
    """

    _REDEPLOY_JOB_NAME = "redeploy_run"

    def __init__(
        self,
        api_adapter: OktetoApiPort,
        cli_adapter: OktetoCliPort,
        config: RedeployOrchestratorConfig,
        now_provider: Callable[[], datetime] | None = None,
    ):
        """Initialize redeploy orchestrator dependencies.

        Args:
            api_adapter: Adapter listing namespaces and applications.
            cli_adapter: Adapter running redeploy and sleep commands.
            config: Redeploy execution configuration.
            now_provider: Optional provider of the current aware datetime.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if api_adapter is None:
            raise ValueError("api_adapter must not be None")
        if cli_adapter is None:
            raise ValueError("cli_adapter must not be None")
        if config.threshold < timedelta(0):
            raise ValueError("config.threshold must not be negative")

        self._api_adapter = api_adapter
        self._cli_adapter = cli_adapter
        self._config = config
        self._now_provider = now_provider or (lambda: datetime.now(timezone.utc))

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names.

        Returns:
            tuple[str, ...]: Supported job names.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return (self._REDEPLOY_JOB_NAME,)

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Redeploy every stale application across all namespaces.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: `failed` when namespaces could not be listed, `success` otherwise.

        Raises:
            ValueError: Raised when job name is unsupported.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._REDEPLOY_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        summary = RedeployRunSummary()
        if self._config.dry_run:
            logger.info("Dry run mode is enabled")

        try:
            namespaces = self._api_adapter.adapter_list_namespaces()
        except _RECOVERABLE_ERRORS as error:
            logger.error("There was an error requesting the namespaces: %s", error)
            return JobExecutionResult(job_name=normalized_job_name, status="failed", summary=summary)

        update_threshold = self._now_provider() - self._config.threshold
        for namespace in namespaces:
            self._job_process_namespace(namespace=namespace, update_threshold=update_threshold, summary=summary)
            logger.info(NAMESPACE_SEPARATOR)

        logger.info(
            "Redeploy run finished: %d applications redeployed, %d skipped, %d failed across %d namespaces",
            summary.applications_redeployed,
            summary.applications_skipped,
            summary.applications_failed,
            len(namespaces),
        )
        return JobExecutionResult(job_name=normalized_job_name, status="success", summary=summary)

    def _job_process_namespace(
        self,
        namespace: Namespace,
        update_threshold: datetime,
        summary: RedeployRunSummary,
    ) -> None:
        """Redeploy stale applications of one namespace and optionally re-sleep it.

        Args:
            namespace: Namespace snapshot.
            update_threshold: Applications updated strictly after this instant are skipped.
            summary: Mutable run counters.

        Returns:
            None: Updates summary as side effect.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        logger.info("Processing namespace '%s'", namespace.name)

        if namespace.namespace_is_sleeping() and self._config.ignore_sleeping_namespaces:
            logger.info("Skipping namespace '%s' since its sleeping", namespace.name)
            summary.namespaces_skipped += 1
            return

        try:
            applications = self._api_adapter.adapter_list_applications(namespace_name=namespace.name)
        except _RECOVERABLE_ERRORS as error:
            logger.error(
                "There was an error requesting the applications within namespace '%s': %s",
                namespace.name,
                error,
            )
            summary.namespaces_failed += 1
            return

        summary.namespaces_processed += 1
        for application in applications:
            self._job_process_application(
                namespace=namespace,
                application=application,
                update_threshold=update_threshold,
                summary=summary,
            )

        if self._config.restore_original_namespace_status and namespace.namespace_is_sleeping():
            self._job_sleep_namespace(namespace=namespace, summary=summary)

    def _job_process_application(
        self,
        namespace: Namespace,
        application: Application,
        update_threshold: datetime,
        summary: RedeployRunSummary,
    ) -> None:
        """Redeploy one application when it has a repository and is stale.

        Args:
            namespace: Namespace holding the application.
            application: Application snapshot.
            update_threshold: Applications updated strictly after this instant are skipped.
            summary: Mutable run counters.

        Returns:
            None: Updates summary as side effect.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if not application.application_has_repository():
            logger.info(
                "Skipping application '%s' within namespace '%s' as does not have a repository",
                application.name,
                namespace.name,
            )
            summary.applications_skipped += 1
            return

        logger.info("application '%s' lastupdate %s", application.name, application.last_updated.isoformat())
        if application.last_updated > update_threshold:
            logger.info(
                "Skipping application '%s' within namespace '%s' as it was updated recently",
                application.name,
                namespace.name,
            )
            summary.applications_skipped += 1
            return

        logger.info("Redeploying application '%s' within namespace '%s'", application.name, namespace.name)
        try:
            output = self._cli_adapter.adapter_redeploy_application(
                namespace_name=namespace.name,
                application_name=application.name,
                repository=application.repository or "",
                branch=application.branch or "",
                wait=self._config.wait_for_deployment,
                dry_run=self._config.dry_run,
            )
        except _RECOVERABLE_ERRORS as error:
            logger.error(
                "There was an error redeploying the application '%s' within namespace '%s': %s",
                application.name,
                namespace.name,
                error,
            )
            summary.applications_failed += 1
            return

        logger.info(output)
        summary.applications_redeployed += 1

    def _job_sleep_namespace(self, namespace: Namespace, summary: RedeployRunSummary) -> None:
        """Put one namespace back to sleep after its applications were processed.

        Args:
            namespace: Namespace whose original status was `Sleeping`.
            summary: Mutable run counters.

        Returns:
            None: Updates summary as side effect.

        Raises:
            RuntimeError: This helper does not raise runtime errors; sleep
                command failures are logged and counted.
        """

        try:
            output = self._cli_adapter.adapter_sleep_namespace(
                namespace_name=namespace.name,
                dry_run=self._config.dry_run,
            )
        except _RECOVERABLE_ERRORS as error:
            logger.error("There was an error sleeping namespace '%s': %s", namespace.name, error)
            summary.namespaces_sleep_failed += 1
            return

        logger.info(output)
        summary.namespaces_slept += 1
