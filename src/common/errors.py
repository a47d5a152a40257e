"""Structured MCP errors raised by handlers and the dispatcher.

Three classifications are used, mapped onto JSON-RPC error codes:
invalid parameters, method not found and internal error.
"""
from __future__ import annotations

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class RegistryRequestError(Exception):
    """Raised by the HTTP layer when a registry cannot be reached."""


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))
