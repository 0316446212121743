"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    CONFIG_ERROR = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MAVEN_FORMAT = "maven2"
    SNAPSHOTS_REPOSITORY = "snapshots"
    SNAPSHOT_MARKER = "-SNAPSHOT"
    DEFAULT_EXTENSION = "jar"
    DEFAULT_LIMIT = 10
    # Hits requested from the index before re-sorting by version; the index
    # orders by recency, which is not version order.
    SEARCH_WINDOW = 2000
    # Widest digit run that still parses as a numeric version token.
    MAX_NUMERIC_TOKEN = 2**31 - 1
    LABEL_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_CONTENT_TYPE = "application/octet-stream"

    ROUTE_PREFIX = "/rundeck/maven/options"
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 8081
    DEFAULT_SEARCH_URL = "http://localhost:9200"
    DEFAULT_SEARCH_INDEX = "components"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for search requests
    STREAM_CHUNK_SIZE = 64 * 1024
    DOWNLOADS_FILE = ".rundeck-downloads.json"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "RUNDECK_OPTIONS_LOG_LEVEL"
