"""check_go_versions."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.shared.exceptions import McpError

import mcp_schemas
from constants import Constants
from handlers import text_response
from mcp_validate import require_shape
from registry.go import client as go_client
from versioning.models import GoModule, GoReplace, PackageVersion

logger = logging.getLogger(__name__)


class GoHandler:
    """Resolves go.mod require/replace directives against the module proxy."""

    def __init__(self, registry: str = Constants.REGISTRY_URL_GO, timeout: Optional[float] = None):
        self.registry = registry
        self.timeout = timeout

    def _lookup(self, path: str, version: Optional[str], name: Optional[str] = None,
                label: Optional[str] = None) -> Optional[PackageVersion]:
        try:
            return go_client.get_module_version(
                path, version, name=name, label=label, url=self.registry, timeout=self.timeout
            )
        except McpError as exc:
            logger.warning("Error checking Go module %s: %s", path, exc.error.message)
            return None

    def _lookup_replacement(self, rep: GoReplace, fallback_version: Optional[str]) -> Optional[PackageVersion]:
        if rep.is_local:
            logger.info("Skipping %s: replaced by local path %s", rep.old, rep.new)
            return None
        return self._lookup(rep.new, rep.version or fallback_version, name=rep.old,
                            label=f"replaced by {rep.new}")

    def get_latest_version(self, args: Dict[str, Any]) -> Dict[str, Any]:
        require_shape(mcp_schemas.GO_MODULE_SHAPE, args, "go.mod dependencies")
        module = GoModule.from_dict(args["dependencies"])
        replacements: Dict[str, GoReplace] = {}
        for rep in module.replace:
            if rep.old in replacements:
                logger.warning("Duplicate replace for %s; using %s", rep.old, rep.new)
            replacements[rep.old] = rep

        results: List[PackageVersion] = []
        required = set()
        for req in module.require:
            required.add(req.path)
            rep = replacements.get(req.path)
            result = self._lookup_replacement(rep, req.version) if rep else self._lookup(req.path, req.version)
            if result:
                results.append(result)

        for rep in replacements.values():
            if rep.old in required:
                continue
            result = self._lookup_replacement(rep, None)
            if result:
                results.append(result)
        return text_response(results)
