"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0


class Ecosystems(Enum):
    """Language/framework identifiers accepted by the enable list.

    Args:
        Enum (string): Identifiers as they appear in configuration.
    """

    NPM = "npm"
    PYTHON = "python"
    MAVEN = "maven"
    GRADLE = "gradle"
    GO = "go"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SERVER_NAME = "package-version-server"
    SERVER_VERSION = "0.1.10"

    REGISTRY_URL_NPM = "https://registry.npmjs.org"
    REGISTRY_URL_PYPI = "https://pypi.org/pypi"
    REGISTRY_URL_MAVEN = "https://search.maven.org/solrsearch/select"
    REGISTRY_URL_GO = "https://proxy.golang.org"

    SUPPORTED_ECOSYSTEMS = [
        Ecosystems.NPM.value,
        Ecosystems.PYTHON.value,
        Ecosystems.MAVEN.value,
        Ecosystems.GRADLE.value,
        Ecosystems.GO.value,
    ]

    ENV_ENABLED_ECOSYSTEMS = "PV_ENABLED_LANGUAGES_FRAMEWORKS"
    ENV_CONFIG_FILE = "PV_CONFIG_FILE"

    NPM_SEARCH_DEFAULT_SIZE = 20
    NPM_SEARCH_MAX_SIZE = 250

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = f"{SERVER_NAME}/{SERVER_VERSION}"
