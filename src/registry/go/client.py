"""Go module proxy client (``GOPROXY`` protocol, ``@latest`` endpoint)."""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common import http_client
from common.errors import RegistryRequestError, internal_error
from common.logging_utils import extra_context
from versioning.models import PackageVersion

logger = logging.getLogger(__name__)

REGISTRY_TAG = "go"


def escape_module_path(path: str) -> str:
    """Case-encode a module path: each upper-case letter becomes ``!`` + lower-case.

    >>> escape_module_path("github.com/Azure/azure-sdk-for-go")
    'github.com/!azure/azure-sdk-for-go'
    """
    return "".join(f"!{ch.lower()}" if ch.isupper() else ch for ch in path)


def get_module_version(
    path: str,
    current_version: Optional[str] = None,
    name: Optional[str] = None,
    label: Optional[str] = None,
    url: str = Constants.REGISTRY_URL_GO,
    timeout: Optional[float] = None,
) -> PackageVersion:
    """Return the ``Version`` reported by ``{proxy}/{module}/@latest``.

    Args:
        path: Module path to look up.
        current_version: Declared version, passed through unchanged.
        name: Name to report; defaults to ``path``.
        label: Optional provenance (e.g. a replace directive).

    Raises:
        McpError: INTERNAL_ERROR when the module cannot be resolved.
    """
    latest_url = f"{url.rstrip('/')}/{escape_module_path(path)}/@latest"
    try:
        status, data = http_client.get_json(latest_url, context="go", timeout=timeout)
        latest = data.get("Version") if isinstance(data, dict) else None
        if not latest:
            raise ValueError(f"Latest version not found (status {status})")
    except (RegistryRequestError, ValueError) as exc:
        logger.error(
            "Error fetching Go module %s: %s",
            path,
            exc,
            extra=extra_context(event="lookup", outcome="error", package_manager="go"),
        )
        raise internal_error(f"Failed to fetch Go module {path}") from exc

    return PackageVersion(
        name=name or path,
        latest_version=latest,
        registry=REGISTRY_TAG,
        current_version=current_version,
        label=label,
    )
