"""NPM registry client: latest dist-tag lookups and package search."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, List, Optional

from mcp.shared.exceptions import McpError

from constants import Constants
from common import http_client
from common.errors import RegistryRequestError, internal_error
from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import PackageVersion
from versioning.parser import strip_npm_range_prefix

logger = logging.getLogger(__name__)

REGISTRY_TAG = "npm"


def get_package_version(
    name: str,
    current_version: Optional[str] = None,
    url: str = Constants.REGISTRY_URL_NPM,
    timeout: Optional[float] = None,
) -> PackageVersion:
    """Look up the ``latest`` dist-tag of an npm package.

    Args:
        name: Package name, scoped names included (``@scope/pkg``).
        current_version: Declared range; a leading ``^``/``~`` is stripped.
        url: Registry base URL.
        timeout: Optional request timeout in seconds.

    Raises:
        McpError: INTERNAL_ERROR when the package cannot be resolved.
    """
    package_url = f"{url.rstrip('/')}/{urllib.parse.quote(name, safe='')}"
    try:
        status, data = http_client.get_json(package_url, context="npm", timeout=timeout)
        latest = ((data or {}).get("dist-tags") or {}).get("latest") if isinstance(data, dict) else None
        if not latest:
            raise ValueError(f"Latest version not found (status {status})")
    except (RegistryRequestError, ValueError) as exc:
        logger.error(
            "Error fetching npm package %s: %s",
            name,
            exc,
            extra=extra_context(event="lookup", outcome="error", package_manager="npm"),
        )
        raise internal_error(f"Failed to fetch npm package {name}") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved npm package %s -> %s",
            name,
            latest,
            extra=extra_context(event="lookup", outcome="success", package_manager="npm"),
        )
    return PackageVersion(
        name=name,
        latest_version=latest,
        registry=REGISTRY_TAG,
        current_version=strip_npm_range_prefix(current_version) if current_version else None,
    )


def build_search_params(
    query: str,
    size: Optional[int] = None,
    quality: Optional[float] = None,
    popularity: Optional[float] = None,
    maintenance: Optional[float] = None,
) -> Dict[str, str]:
    """Build the query string for the npm search endpoint; size is capped at 250."""
    params = {
        "text": query,
        "size": str(min(int(size or Constants.NPM_SEARCH_DEFAULT_SIZE), Constants.NPM_SEARCH_MAX_SIZE)),
    }
    for key, value in (("quality", quality), ("popularity", popularity), ("maintenance", maintenance)):
        if value is not None:
            params[key] = str(value)
    return params


def _to_search_hit(obj: Dict[str, Any]) -> Dict[str, Any]:
    pkg = obj["package"]
    return {
        "name": pkg.get("name"),
        "version": pkg.get("version"),
        "description": pkg.get("description"),
        "keywords": pkg.get("keywords") or [],
        "score": obj.get("score"),
        "publisher": pkg.get("publisher"),
        "date": pkg.get("date"),
        "links": pkg.get("links"),
    }


def search_packages(
    query: str,
    size: Optional[int] = None,
    quality: Optional[float] = None,
    popularity: Optional[float] = None,
    maintenance: Optional[float] = None,
    url: str = Constants.REGISTRY_URL_NPM,
    timeout: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """Search the npm registry and return one summary dict per hit.

    Raises:
        McpError: INTERNAL_ERROR on a non-200 status or an unusable body.
    """
    params = build_search_params(query, size, quality, popularity, maintenance)
    search_url = f"{url.rstrip('/')}/-/v1/search"
    try:
        status, data = http_client.get_json(search_url, context="npm-search", timeout=timeout, params=params)
        if status != 200:
            raise internal_error(f"NPM registry search failed with status {status}")
        if not isinstance(data, dict) or not isinstance(data.get("objects"), list):
            raise ValueError("malformed search response")
        return [
            _to_search_hit(obj) for obj in data["objects"]
            if isinstance(obj, dict) and isinstance(obj.get("package"), dict)
        ]
    except McpError:
        raise
    except (RegistryRequestError, ValueError) as exc:
        logger.error("npm search for %r failed: %s", query, exc)
        raise internal_error(f"Failed to search NPM registry: {exc}") from exc
