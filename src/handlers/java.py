"""check_maven_versions and check_gradle_versions."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.shared.exceptions import McpError

import mcp_schemas
from constants import Constants
from handlers import text_response
from mcp_validate import require_shape
from registry.maven import client as maven_client
from versioning.models import GradleDependency, MavenDependency, PackageVersion

logger = logging.getLogger(__name__)


class JavaHandler:
    """Resolves pom.xml and build.gradle dependencies against Maven Central."""

    def __init__(self, registry: str = Constants.REGISTRY_URL_MAVEN, timeout: Optional[float] = None):
        self.registry = registry
        self.timeout = timeout

    def _lookup(self, group: str, artifact: str, version: Optional[str], registry: str,
                label: Optional[str]) -> Optional[PackageVersion]:
        try:
            return maven_client.get_artifact_version(
                group, artifact, version, registry=registry, label=label,
                url=self.registry, timeout=self.timeout,
            )
        except McpError as exc:
            logger.warning("Error checking %s package %s:%s: %s", registry, group, artifact, exc.error.message)
            return None

    def get_latest_version_from_maven(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.JAVA_DEPENDENCIES_SHAPE, args, "dependencies array")

        results: List[PackageVersion] = []
        for raw in args["dependencies"]:
            dep = MavenDependency.from_dict(raw) if isinstance(raw, dict) else None
            if dep is None:
                logger.debug("Skipping Maven dependency without coordinates: %r", raw)
                continue
            result = self._lookup(dep.group_id, dep.artifact_id, dep.version, "maven", dep.scope)
            if result:
                results.append(result)
        return text_response(results)

    def get_latest_version(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.JAVA_DEPENDENCIES_SHAPE, args, "dependencies array")

        results: List[PackageVersion] = []
        for raw in args["dependencies"]:
            dep = GradleDependency.from_dict(raw) if isinstance(raw, dict) else None
            if dep is None:
                logger.debug("Skipping Gradle dependency without coordinates: %r", raw)
                continue
            result = self._lookup(dep.group, dep.name, dep.version, "gradle", dep.configuration)
            if result:
                results.append(result)
        return text_response(results)
