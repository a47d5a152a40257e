"""Server configuration assembled once at startup.

Precedence (highest first): CLI arguments, environment variables, the
optional YAML config file, then defaults from ``Constants``. The resulting
ServerConfig is immutable and handed to the dispatcher explicitly.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
    """Read-only runtime configuration for one server process."""

    enabled: FrozenSet[str] = field(default_factory=lambda: frozenset(Constants.SUPPORTED_ECOSYSTEMS))
    request_timeout: float = Constants.REQUEST_TIMEOUT
    npm_registry: str = Constants.REGISTRY_URL_NPM
    pypi_registry: str = Constants.REGISTRY_URL_PYPI
    maven_registry: str = Constants.REGISTRY_URL_MAVEN
    go_registry: str = Constants.REGISTRY_URL_GO

    def is_enabled(self, ecosystem: str) -> bool:
        return ecosystem.lower() in self.enabled


def parse_enabled(value: Union[str, Iterable[str], None]) -> Optional[FrozenSet[str]]:
    """Parse a comma-separated (or list) enable setting.

    Matching is case-insensitive and whitespace-tolerant. Returns None when
    the value is absent or empty, meaning "use the next source / all".
    Unknown identifiers are dropped with a warning.
    """
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else [str(v) for v in value]
    names = {item.strip().lower() for item in items if item and item.strip()}
    if not names:
        return None
    unknown = names.difference(Constants.SUPPORTED_ECOSYSTEMS)
    if unknown:
        logger.warning("Ignoring unknown language/framework identifiers: %s", ", ".join(sorted(unknown)))
    return frozenset(names & set(Constants.SUPPORTED_ECOSYSTEMS))


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML config file; unreadable or malformed files yield {}."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not load config file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a mapping; ignoring", path)
        return {}
    return data


def build_config(args: Any = None, environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build the ServerConfig from CLI args, environment and config file."""
    env = os.environ if environ is None else environ
    file_cfg = load_config_file(getattr(args, "CONFIG_FILE", None) or env.get(Constants.ENV_CONFIG_FILE))

    enabled = frozenset(Constants.SUPPORTED_ECOSYSTEMS)
    for source in (
        getattr(args, "ENABLED", None),
        env.get(Constants.ENV_ENABLED_ECOSYSTEMS),
        file_cfg.get("enabled_languages_frameworks"),
    ):
        parsed = parse_enabled(source)
        if parsed is not None:
            enabled = parsed
            break

    timeout = getattr(args, "REQUEST_TIMEOUT", None) or file_cfg.get("request_timeout") or Constants.REQUEST_TIMEOUT
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        logger.warning("Invalid request timeout %r; using %s", timeout, Constants.REQUEST_TIMEOUT)
        timeout = float(Constants.REQUEST_TIMEOUT)

    registries = file_cfg.get("registries") or {}
    if not isinstance(registries, dict):
        registries = {}

    return ServerConfig(
        enabled=enabled,
        request_timeout=timeout,
        npm_registry=registries.get("npm") or Constants.REGISTRY_URL_NPM,
        pypi_registry=registries.get("pypi") or Constants.REGISTRY_URL_PYPI,
        maven_registry=registries.get("maven") or Constants.REGISTRY_URL_MAVEN,
        go_registry=registries.get("go") or Constants.REGISTRY_URL_GO,
    )
