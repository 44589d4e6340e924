"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    RESOLUTION_ERROR = 2
    EOL_VIOLATION = 3
    CONFIG_ERROR = 4


class EolBehaviour(Enum):
    """How resolved versions past their end-of-life date are handled.

    Args:
        Enum (string): End-of-life handling modes.
    """

    WARN = "warn"
    STRIP = "strip"
    FAIL = "fail"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    EOL_API_URL = "https://endoflife.date/api/python.json"
    # Update periodically as new versions are released
    STATIC_PYTHON_VERSIONS = ["3.9", "3.10", "3.11", "3.12", "3.13"]
    STATIC_EOL_DATES = {
        "3.9": "2025-10-31",
        "3.10": "2026-10-31",
        "3.11": "2027-10-31",
        "3.12": "2028-10-31",
        "3.13": "2029-10-31",
    }
    MIN_PYTHON_VERSION = "3.9"

    MANIFEST_FILE = "pyproject.toml"
    MATRIX_KEY = "python-version"
    OUTPUT_SUPPORTED = "supported_python"
    OUTPUT_BUILD = "build_python"
    OUTPUT_MATRIX = "matrix_json"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    EOL_BEHAVIOURS = [mode.value for mode in EolBehaviour]

    REQUEST_TIMEOUT = 6  # Timeout in seconds for the lifecycle lookup
    HTTP_RETRY_MAX = 2  # Retries after the first attempt
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_RETRY_MAX_DELAY_SEC = 5.0
    USER_AGENT = "python-supported-versions/1.0"

    ENV_PATH_PREFIX = "INPUT_PATH_PREFIX"
    ENV_NETWORK_TIMEOUT = "INPUT_NETWORK_TIMEOUT"
    ENV_MAX_RETRIES = "INPUT_MAX_RETRIES"
    ENV_EOL_BEHAVIOUR = "INPUT_EOL_BEHAVIOUR"
    ENV_OFFLINE_MODE = "INPUT_OFFLINE_MODE"
    ENV_EXCLUDE_EOL = "INPUT_EXCLUDE_EOL"
    ENV_LOG_LEVEL = "PYVERSIONS_LOG_LEVEL"
    ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"
    ENV_GITHUB_ACTIONS = "GITHUB_ACTIONS"
