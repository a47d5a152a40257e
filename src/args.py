"""Argument parsing functionality for the package version server."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="package-version",
        description=(
            "MCP server reporting the latest stable versions of npm, Python, "
            "Maven, Gradle and Go dependencies"
        ),
        add_help=True,
    )

    parser.add_argument("--enable",
                        dest="ENABLED",
                        help=(
                            "Comma-separated languages/frameworks to enable "
                            f"({', '.join(Constants.SUPPORTED_ECOSYSTEMS)}). "
                            f"Overrides {Constants.ENV_ENABLED_ECOSYSTEMS}."
                        ),
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG_FILE",
                        help=f"Path to a YAML config file. Defaults to ${Constants.ENV_CONFIG_FILE}.",
                        action="store",
                        type=str)
    parser.add_argument("--request-timeout",
                        dest="REQUEST_TIMEOUT",
                        help=f"HTTP timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float)
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
    parser.add_argument("-v", "--version",
                        action="version",
                        version=f"%(prog)s {Constants.SERVER_VERSION}")

    return parser.parse_args(argv)
