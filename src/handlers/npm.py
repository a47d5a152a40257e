"""check_npm_versions and search_npm_packages."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.shared.exceptions import McpError

import mcp_schemas
from constants import Constants
from handlers import text_response
from mcp_validate import require_shape
from registry.npm import client as npm_client
from versioning.models import PackageVersion

logger = logging.getLogger(__name__)


class NpmHandler:
    """Resolves package.json dependency maps against the npm registry."""

    def __init__(self, registry: str = Constants.REGISTRY_URL_NPM, timeout: Optional[float] = None):
        self.registry = registry
        self.timeout = timeout

    def get_latest_version(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.NPM_DEPENDENCIES_SHAPE, args, "dependencies object")

        results: List[PackageVersion] = []
        for name, version in args["dependencies"].items():
            if not isinstance(version, str):
                logger.debug("Skipping npm dependency %s with non-string version", name)
                continue
            try:
                results.append(
                    npm_client.get_package_version(name, version, url=self.registry, timeout=self.timeout)
                )
            except McpError as exc:
                logger.warning("Error checking npm package %s: %s", name, exc.error.message)
        return text_response(results)

    def search_packages(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.SEARCH_SHAPE, args, "search parameters")
        hits = npm_client.search_packages(
            args["query"],
            size=args.get("size"),
            quality=args.get("quality"),
            popularity=args.get("popularity"),
            maintenance=args.get("maintenance"),
            url=self.registry,
            timeout=self.timeout,
        )
        return text_response(hits)
