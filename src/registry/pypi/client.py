"""PyPI registry client: latest release lookups through the JSON API."""
from __future__ import annotations

import logging
from typing import Optional

from packaging.utils import canonicalize_name

from constants import Constants
from common import http_client
from common.errors import RegistryRequestError, internal_error
from common.logging_utils import extra_context
from versioning.models import PackageVersion

logger = logging.getLogger(__name__)

REGISTRY_TAG = "pypi"


def get_package_version(
    name: str,
    current_version: Optional[str] = None,
    label: Optional[str] = None,
    url: str = Constants.REGISTRY_URL_PYPI,
    timeout: Optional[float] = None,
) -> PackageVersion:
    """Return ``info.version`` of a PyPI project.

    The URL uses the PEP 503 normalized name; the result keeps the name as
    written by the caller.

    Raises:
        McpError: INTERNAL_ERROR when the project cannot be resolved.
    """
    fullurl = f"{url.rstrip('/')}/{canonicalize_name(name)}/json"
    try:
        status, data = http_client.get_json(fullurl, context="pypi", timeout=timeout)
        info = data.get("info") if isinstance(data, dict) else None
        latest = info.get("version") if isinstance(info, dict) else None
        if not latest:
            raise ValueError(f"Latest version not found (status {status})")
    except (RegistryRequestError, ValueError) as exc:
        logger.error(
            "Error fetching PyPI package %s: %s",
            name,
            exc,
            extra=extra_context(event="lookup", outcome="error", package_manager="pypi"),
        )
        raise internal_error(f"Failed to fetch PyPI package {name}") from exc

    return PackageVersion(
        name=name,
        latest_version=latest,
        registry=REGISTRY_TAG,
        current_version=current_version,
        label=label,
    )
