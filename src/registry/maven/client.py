"""Maven Central search client, shared by the Maven and Gradle tools."""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common import http_client
from common.errors import RegistryRequestError, internal_error
from common.logging_utils import extra_context
from versioning.models import PackageVersion

logger = logging.getLogger(__name__)


def build_query(group_id: str, artifact_id: str) -> dict:
    """Solr parameters selecting exactly one groupId/artifactId pair."""
    return {"q": f'g:"{group_id}" AND a:"{artifact_id}"', "rows": 1, "wt": "json"}


def get_artifact_version(
    group_id: str,
    artifact_id: str,
    current_version: Optional[str] = None,
    registry: str = "maven",
    label: Optional[str] = None,
    url: str = Constants.REGISTRY_URL_MAVEN,
    timeout: Optional[float] = None,
) -> PackageVersion:
    """Return ``latestVersion`` of an artifact as reported by Maven Central search.

    Args:
        group_id: Maven groupId (Gradle "group").
        artifact_id: Maven artifactId (Gradle "name").
        current_version: Declared version, passed through unchanged.
        registry: Registry tag for the result, "maven" or "gradle".
        label: Scope or configuration the dependency was declared with.

    Raises:
        McpError: INTERNAL_ERROR when the artifact cannot be resolved.
    """
    coordinates = f"{group_id}:{artifact_id}"
    try:
        status, data = http_client.get_json(
            url, context=registry, timeout=timeout, params=build_query(group_id, artifact_id)
        )
        docs = ((data or {}).get("response") or {}).get("docs") if isinstance(data, dict) else None
        latest = docs[0].get("latestVersion") if docs and isinstance(docs[0], dict) else None
        if not latest:
            raise ValueError(f"Latest version not found (status {status})")
    except (RegistryRequestError, ValueError) as exc:
        logger.error(
            "Error fetching %s package %s: %s",
            registry,
            coordinates,
            exc,
            extra=extra_context(event="lookup", outcome="error", package_manager=registry),
        )
        raise internal_error(f"Failed to fetch {registry} package {coordinates}") from exc

    return PackageVersion(
        name=coordinates,
        latest_version=latest,
        registry=registry,
        current_version=current_version,
        label=label,
    )
