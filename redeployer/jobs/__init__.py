"""Job layer package for workflow orchestration boundaries."""

from .interfaces import JobExecutionResult, JobOrchestratorPort, RedeployRunSummary
from .redeploy_orchestrator import (
	NAMESPACE_SEPARATOR,
	RedeployJobOrchestrator,
	RedeployOrchestratorConfig,
)

__all__ = [
	"JobExecutionResult",
	"JobOrchestratorPort",
	"NAMESPACE_SEPARATOR",
	"RedeployJobOrchestrator",
	"RedeployOrchestratorConfig",
	"RedeployRunSummary",
]
