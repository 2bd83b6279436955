"""Typed interfaces for job-layer orchestration responsibilities."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class RedeployRunSummary:
    """Counters collected while one redeploy run executes.

    Attributes:
        namespaces_processed: Namespaces whose applications were listed.
        namespaces_skipped: Sleeping namespaces skipped by configuration.
        namespaces_failed: Namespaces whose application listing failed.
        applications_redeployed: Redeploy commands that succeeded or were reported in dry-run.
        applications_skipped: Applications without repository or updated recently.
        applications_failed: Redeploy commands that failed.
        namespaces_slept: Sleep commands that succeeded or were reported in dry-run.
        namespaces_sleep_failed: Sleep commands that failed.
    """

    namespaces_processed: int = 0
    namespaces_skipped: int = 0
    namespaces_failed: int = 0
    applications_redeployed: int = 0
    applications_skipped: int = 0
    applications_failed: int = 0
    namespaces_slept: int = 0
    namespaces_sleep_failed: int = 0


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for one workflow execution.

    Attributes:
        job_name: Job identifier.
        status: Final execution state (`success` or `failed`).
        summary: Counters collected during the run.
    """

    job_name: str
    status: str
    summary: RedeployRunSummary = field(default_factory=RedeployRunSummary)


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating redeploy jobs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.

        Raises:
            RuntimeError: Raised when supported job metadata is unavailable.
        """

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            ValueError: Raised when the job name is unsupported.
        """
