"""Command-line entry point for the option server."""

from __future__ import annotations

import logging
import sys
from typing import Any

from .args import parse_args
from .common.logging_utils import configure_logging
from .config import ConfigError, load_config
from .constants import ExitCodes

logger = logging.getLogger(__name__)


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def main(argv=None) -> int:
    """Entry point for the ``rundeck-maven-options`` command."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        file_config = load_config(getattr(args, "CONFIG", None))
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value

    # Lazy import to keep --help free of aiohttp/requests
    from .service.server import ServiceConfig, run_server_sync  # pylint: disable=import-outside-toplevel

    config = ServiceConfig.from_args(args, file_config)
    if not config.repositories:
        logger.warning("No repositories configured - every content request will be not found")

    run_server_sync(config)
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
