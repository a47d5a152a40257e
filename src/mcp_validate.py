"""JSON Schema validation helpers for MCP tool inputs.

Wraps jsonschema Draft7 validation; failures become MCP invalid-params
errors so callers get a structured rejection instead of a crash.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator

from common.errors import invalid_params


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""


def validate_input(schema: Dict[str, Any], data: Any) -> None:
    """Validate tool input strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Input payload to validate.

    Raises:
        SchemaError: With the JSON path and message of the first error.
    """
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        msg = f"Invalid input at '{path}': {first.message}"
        raise SchemaError(msg)


def require_shape(schema: Dict[str, Any], data: Any, what: str) -> None:
    """Validate ``data`` and convert a SchemaError into an invalid-params McpError."""
    try:
        validate_input(schema, data)
    except SchemaError as se:
        raise invalid_params(f"Invalid {what}: {se}") from se
