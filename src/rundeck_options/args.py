"""Argument parsing for the option server."""

import argparse

from .constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="rundeck-maven-options",
        description=(
            "Rundeck remote option provider for Maven repositories"
        ),
        add_help=True,
    )

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--host",
                        dest="HOST",
                        help=f"Bind address (default: {Constants.DEFAULT_HOST})",
                        action="store",
                        type=str)
    parser.add_argument("-p", "--port",
                        dest="PORT",
                        help=f"Listen port (default: {Constants.DEFAULT_PORT})",
                        action="store",
                        type=int)
    parser.add_argument("--search-url",
                        dest="SEARCH_URL",
                        help="Base URL of the Elasticsearch component index",
                        action="store",
                        type=str)
    parser.add_argument("--search-index",
                        dest="SEARCH_INDEX",
                        help="Name of the component index",
                        action="store",
                        type=str)
    parser.add_argument("--snapshots-repository",
                        dest="SNAPSHOTS_REPOSITORY",
                        help="Repository holding timestamped snapshot builds",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
