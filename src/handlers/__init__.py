"""Per-ecosystem tool handlers.

Handlers validate a manifest fragment, look each entry up sequentially and
wrap the collected list in an MCP text content block. A failed lookup is
logged and skipped so the caller still receives the partial result.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from versioning.models import PackageVersion


def text_response(items: Iterable[Any]) -> Dict[str, List[Dict[str, str]]]:
    """Serialize ``items`` as pretty-printed JSON inside a content envelope."""
    payload = [item.to_dict() if isinstance(item, PackageVersion) else item for item in items]
    return {"content": [{"type": "text", "text": json.dumps(payload, indent=2)}]}
