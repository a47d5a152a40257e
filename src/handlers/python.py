"""check_python_versions and check_pyproject_versions."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mcp.shared.exceptions import McpError

import mcp_schemas
from constants import Constants
from handlers import text_response
from mcp_validate import require_shape
from registry.pypi import client as pypi_client
from versioning.models import PackageVersion, PyProjectDependencies, PyProjectSection
from versioning.parser import parse_requirement_line, strip_constraint

logger = logging.getLogger(__name__)

# Poetry lists the interpreter constraint alongside real dependencies.
_INTERPRETER_KEYS = {"python"}


def iter_section(section: Optional[PyProjectSection]) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield ``(name, version hint)`` pairs from a pyproject dependency section.

    Accepts a name -> constraint map (Poetry) or a list of PEP 508 strings
    (PEP 621). Table-valued constraints use their ``version`` key.
    """
    if isinstance(section, dict):
        for name, spec in section.items():
            if name.lower() in _INTERPRETER_KEYS:
                continue
            if isinstance(spec, dict):
                spec = spec.get("version")
            yield name, strip_constraint(spec) if isinstance(spec, str) else None
    elif isinstance(section, list):
        for line in section:
            parsed = parse_requirement_line(line) if isinstance(line, str) else None
            if parsed:
                yield parsed


class PythonHandler:
    """Resolves requirements.txt lines and pyproject tables against PyPI."""

    def __init__(self, registry: str = Constants.REGISTRY_URL_PYPI, timeout: Optional[float] = None):
        self.registry = registry
        self.timeout = timeout

    def _lookup(self, name: str, version: Optional[str], label: Optional[str] = None) -> Optional[PackageVersion]:
        try:
            return pypi_client.get_package_version(
                name, version, label=label, url=self.registry, timeout=self.timeout
            )
        except McpError as exc:
            logger.warning("Error checking Python package %s: %s", name, exc.error.message)
            return None

    def get_latest_version_from_requirements(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.REQUIREMENTS_SHAPE, args, "requirements array")

        results: List[PackageVersion] = []
        for line in args["requirements"]:
            parsed = parse_requirement_line(line) if isinstance(line, str) else None
            if parsed is None:
                logger.debug("Skipping requirement line %r", line)
                continue
            result = self._lookup(*parsed)
            if result:
                results.append(result)
        return text_response(results)

    def get_latest_version(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.PYPROJECT_SHAPE, args, "dependencies object")
        deps = PyProjectDependencies.from_dict(args["dependencies"])

        sections: List[Tuple[Optional[str], Optional[PyProjectSection]]] = [(None, deps.dependencies)]
        sections.extend(
            (f"optional-dependencies.{group}", section)
            for group, section in deps.optional_dependencies.items()
        )
        sections.append(("dev-dependencies", deps.dev_dependencies))

        results: List[PackageVersion] = []
        for label, section in sections:
            for name, version in iter_section(section):
                result = self._lookup(name, version, label)
                if result:
                    results.append(result)
        return text_response(results)
