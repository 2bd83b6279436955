"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from redeployer.domain import Application, Namespace


class OktetoApiPort(Protocol):
    """Port definition for reading namespaces and applications from Okteto."""

    def adapter_list_namespaces(self) -> list[Namespace]:
        """Fetch every namespace visible to the configured token.

        Returns:
            list[Namespace]: Namespaces in API order.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
            ValueError: Raised when the response contract is invalid.
        """

    def adapter_list_applications(self, namespace_name: str) -> list[Application]:
        """Fetch every application deployed within one namespace.

        Args:
            namespace_name: Namespace to list.

        Returns:
            list[Application]: Applications in API order.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
            ValueError: Raised when the response contract is invalid.
        """


class OktetoCliPort(Protocol):
    """Port definition for Okteto CLI actions."""

    def adapter_redeploy_application(
        self,
        namespace_name: str,
        application_name: str,
        repository: str,
        branch: str,
        wait: bool,
        dry_run: bool,
    ) -> str:
        """Redeploy one application from its repository and branch.

        Returns:
            str: Combined command output, or the dry-run description.

        Raises:
            RuntimeError: Raised when the command fails.
        """

    def adapter_sleep_namespace(self, namespace_name: str, dry_run: bool) -> str:
        """Put one namespace to sleep.

        Returns:
            str: Combined command output, or the dry-run description.

        Raises:
            RuntimeError: Raised when the command fails.
        """
