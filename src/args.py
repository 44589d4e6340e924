"""Argument parsing functionality for python-supported-versions."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Options left unset are None so that environment variables and the config
    file can supply them (see cli_config.load_settings).
    """
    parser = argparse.ArgumentParser(
        prog="python-supported-versions",
        description=(
            "Determine the supported, non end-of-life Python versions declared "
            "by a project's pyproject.toml"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--path-prefix",
                        dest="PATH_PREFIX",
                        help="Directory containing the project manifest",
                        action="store", type=str)
    parser.add_argument("--manifest",
                        dest="MANIFEST",
                        help=f"Manifest file name (default: {Constants.MANIFEST_FILE})",
                        action="store", type=str)
    parser.add_argument("--timeout",
                        dest="NETWORK_TIMEOUT",
                        help=f"Lifecycle lookup timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store", type=str)
    parser.add_argument("--retries",
                        dest="MAX_RETRIES",
                        help=f"Lifecycle lookup retries (default: {Constants.HTTP_RETRY_MAX})",
                        action="store", type=str)
    parser.add_argument("--eol-behaviour",
                        dest="EOL_BEHAVIOUR",
                        help="Handling of end-of-life versions (default: warn)",
                        action="store",
                        type=str.lower,
                        choices=Constants.EOL_BEHAVIOURS)
    parser.add_argument("--offline",
                        dest="OFFLINE_MODE",
                        help="Skip the lifecycle lookup and use the built-in version list",
                        action="store_true",
                        default=None)
    parser.add_argument("--exclude-eol",
                        dest="EXCLUDE_EOL",
                        help="Drop end-of-life versions at the lifecycle lookup instead of applying --eol-behaviour",
                        action="store_true",
                        default=None)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--github-output",
                        dest="GITHUB_OUTPUT",
                        help="File to append key=value outputs to (default: $GITHUB_OUTPUT)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LEVELS)

    return parser.parse_args(argv)
