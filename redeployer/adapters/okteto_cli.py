"""Okteto CLI adapter for redeploy and sleep actions."""

from __future__ import annotations

import logging
import subprocess
from typing import Final

from .interfaces import OktetoCliPort
from .okteto_errors import OktetoCommandError

logger = logging.getLogger(__name__)

DRY_RUN_MARKER: Final[str] = "[DRY MODE]"


class OktetoCliAdapter(OktetoCliPort):
    """Adapter running `okteto` commands as argument lists, without a shell.

    The quoted display form of each command is used for logging, error
    messages and dry-run output.
    """

    _REDEPLOY_DISPLAY_TEMPLATE: Final[str] = (
        '{executable} pipeline deploy -n "{namespace}" --name "{application}" '
        '--repository "{repository}" --branch "{branch}" --reuse-params --wait={wait}'
    )
    _SLEEP_DISPLAY_TEMPLATE: Final[str] = '{executable} namespace sleep "{namespace}"'

    def __init__(self, executable: str = "okteto"):
        """Initialize Okteto CLI adapter.

        Args:
            executable: Okteto CLI executable name or path.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when executable is blank.
        """

        normalized_executable = executable.strip()
        if not normalized_executable:
            raise ValueError("executable must not be blank")
        self._executable = normalized_executable

    def adapter_redeploy_application(
        self,
        namespace_name: str,
        application_name: str,
        repository: str,
        branch: str,
        wait: bool,
        dry_run: bool,
    ) -> str:
        """Redeploy one application with `okteto pipeline deploy --reuse-params`.

        Args:
            namespace_name: Namespace holding the application.
            application_name: Pipeline name.
            repository: Source repository URL.
            branch: Source branch, may be empty.
            wait: Whether the CLI waits for the deployment to finish.
            dry_run: Return the command description instead of running it.

        Returns:
            str: Combined command output, or the dry-run description.

        Raises:
            OktetoCommandError: Raised when the command cannot start or exits non-zero.
        """

        wait_value = "true" if wait else "false"
        arguments = [
            self._executable,
            "pipeline",
            "deploy",
            "-n",
            namespace_name,
            "--name",
            application_name,
            "--repository",
            repository,
            "--branch",
            branch,
            "--reuse-params",
            f"--wait={wait_value}",
        ]
        display_command = self._REDEPLOY_DISPLAY_TEMPLATE.format(
            executable=self._executable,
            namespace=namespace_name,
            application=application_name,
            repository=repository,
            branch=branch,
            wait=wait_value,
        )
        return self._adapter_run(arguments=arguments, display_command=display_command, dry_run=dry_run)

    def adapter_sleep_namespace(self, namespace_name: str, dry_run: bool) -> str:
        """Put one namespace to sleep with `okteto namespace sleep`.

        Args:
            namespace_name: Namespace to sleep.
            dry_run: Return the command description instead of running it.

        Returns:
            str: Combined command output, or the dry-run description.

        Raises:
            OktetoCommandError: Raised when the command cannot start or exits non-zero.
        """

        arguments = [self._executable, "namespace", "sleep", namespace_name]
        display_command = self._SLEEP_DISPLAY_TEMPLATE.format(executable=self._executable, namespace=namespace_name)
        return self._adapter_run(arguments=arguments, display_command=display_command, dry_run=dry_run)

    def _adapter_run(self, arguments: list[str], display_command: str, dry_run: bool) -> str:
        """Run one command and return its combined stdout and stderr.

        Args:
            arguments: Process argument list.
            display_command: Quoted display form of the command.
            dry_run: Skip execution and describe the command instead.

        Returns:
            str: Combined output, or `[DRY MODE] <command>` in dry-run mode.

        Raises:
            OktetoCommandError: Raised when the command cannot start or exits non-zero.
        """

        if dry_run:
            return f"{DRY_RUN_MARKER} {display_command}"

        logger.debug("Running %s", display_command)
        try:
            completed = subprocess.run(
                arguments,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as error:
            raise OktetoCommandError(
                f"could not start `{display_command}`: {error}",
                command=display_command,
            ) from error

        output = completed.stdout or ""
        if completed.returncode != 0:
            raise OktetoCommandError(
                f"`{display_command}` exited with status {completed.returncode}: {output.strip()}",
                command=display_command,
                exit_code=completed.returncode,
                output=output,
            )
        return output
