"""Main module entrypoint for one redeploy run.

This module validates startup configuration, then redeploys every Okteto
application that has not been updated within the configured threshold.
"""

from __future__ import annotations

import argparse
import logging

from redeployer.bootstrap import bootstrap_create_api_adapter, bootstrap_create_redeploy_orchestrator
from redeployer.config import SettingsLoadError, config_configure_logging, config_load_settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run one redeploy workflow with validated startup configuration.

    Args:
        argv: Optional command-line arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Process exit code, 1 on configuration or namespace-listing failure.

    Raises:
        RuntimeError: Unexpected failures propagate to the interpreter.
    """

    argument_parser = argparse.ArgumentParser(
        prog="redeploy-all-applications",
        description="Redeploy Okteto applications that were not updated within OKTETO_THRESHOLD",
    )
    argument_parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Print the okteto commands instead of running them, regardless of DRY_RUN",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    config_configure_logging()
    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        logger.error("%s", error)
        return 1

    if parsed_arguments.dry_run:
        settings = settings.model_copy(update={"dry_run": True})
    config_configure_logging(level=settings.log_level)
    logger.info("Configuration set: %s", settings.settings_describe())

    with bootstrap_create_api_adapter(settings) as api_adapter:
        orchestrator = bootstrap_create_redeploy_orchestrator(settings=settings, api_adapter=api_adapter)
        execution_result = orchestrator.job_execute(job_name="redeploy_run")

    if execution_result.status != "success":
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
