"""MCP server exposing package version tools via the official MCP Python SDK.

Tools (each governed by one language/framework identifier):
  - check_npm_versions, search_npm_packages   (npm)
  - check_python_versions, check_pyproject_versions   (python)
  - check_maven_versions   (maven)
  - check_gradle_versions   (gradle)
  - check_go_versions   (go)

Transport is stdio JSON-RPC. Only tools whose identifier is enabled are
advertised or callable; handlers are constructed only for enabled
ecosystems.
"""
from __future__ import annotations

import asyncio
import logging
import signal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

import mcp_schemas
from cli_config import ServerConfig, build_config
from common.errors import internal_error, invalid_params, method_not_found
from common.logging_utils import configure_logging, extra_context
from common.stdio import StdinLines
from constants import Constants, Ecosystems
from handlers.go import GoHandler
from handlers.java import JavaHandler
from handlers.npm import NpmHandler
from handlers.python import PythonHandler

logger = logging.getLogger(__name__)


class Tool(Enum):
    """Closed set of tool names exposed by the server."""
    CHECK_NPM_VERSIONS = "check_npm_versions"
    CHECK_PYTHON_VERSIONS = "check_python_versions"
    CHECK_PYPROJECT_VERSIONS = "check_pyproject_versions"
    CHECK_MAVEN_VERSIONS = "check_maven_versions"
    CHECK_GRADLE_VERSIONS = "check_gradle_versions"
    CHECK_GO_VERSIONS = "check_go_versions"
    SEARCH_NPM_PACKAGES = "search_npm_packages"


TOOL_ECOSYSTEM: Dict[Tool, Ecosystems] = {
    Tool.CHECK_NPM_VERSIONS: Ecosystems.NPM,
    Tool.CHECK_PYTHON_VERSIONS: Ecosystems.PYTHON,
    Tool.CHECK_PYPROJECT_VERSIONS: Ecosystems.PYTHON,
    Tool.CHECK_MAVEN_VERSIONS: Ecosystems.MAVEN,
    Tool.CHECK_GRADLE_VERSIONS: Ecosystems.GRADLE,
    Tool.CHECK_GO_VERSIONS: Ecosystems.GO,
    Tool.SEARCH_NPM_PACKAGES: Ecosystems.NPM,
}

# Advertised in this order.
TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": Tool.CHECK_NPM_VERSIONS.value,
        "description": "Check latest stable versions for npm packages",
        "inputSchema": mcp_schemas.CHECK_NPM_VERSIONS_INPUT,
    },
    {
        "name": Tool.CHECK_PYTHON_VERSIONS.value,
        "description": "Check latest stable versions for Python packages",
        "inputSchema": mcp_schemas.CHECK_PYTHON_VERSIONS_INPUT,
    },
    {
        "name": Tool.CHECK_PYPROJECT_VERSIONS.value,
        "description": "Check latest stable versions for Python packages in pyproject.toml",
        "inputSchema": mcp_schemas.CHECK_PYPROJECT_VERSIONS_INPUT,
    },
    {
        "name": Tool.CHECK_MAVEN_VERSIONS.value,
        "description": "Check latest stable versions for Java packages in pom.xml",
        "inputSchema": mcp_schemas.CHECK_MAVEN_VERSIONS_INPUT,
    },
    {
        "name": Tool.CHECK_GRADLE_VERSIONS.value,
        "description": "Check latest stable versions for Java packages in build.gradle",
        "inputSchema": mcp_schemas.CHECK_GRADLE_VERSIONS_INPUT,
    },
    {
        "name": Tool.CHECK_GO_VERSIONS.value,
        "description": "Check latest stable versions for Go packages in go.mod",
        "inputSchema": mcp_schemas.CHECK_GO_VERSIONS_INPUT,
    },
    {
        "name": Tool.SEARCH_NPM_PACKAGES.value,
        "description": "Search for NPM packages using the registry search API",
        "inputSchema": mcp_schemas.SEARCH_NPM_PACKAGES_INPUT,
    },
]


def _tool_from_name(name: Optional[str]) -> Optional[Tool]:
    try:
        return Tool(name)
    except ValueError:
        return None


class ToolDispatcher:
    """Routes tool calls to the handler of an enabled ecosystem."""

    def __init__(self, config: ServerConfig):
        self.config = config
        timeout = config.request_timeout
        self.npm_handler = NpmHandler(config.npm_registry, timeout) if config.is_enabled("npm") else None
        self.python_handler = PythonHandler(config.pypi_registry, timeout) if config.is_enabled("python") else None
        self.java_handler = (
            JavaHandler(config.maven_registry, timeout)
            if config.is_enabled("maven") or config.is_enabled("gradle")
            else None
        )
        self.go_handler = GoHandler(config.go_registry, timeout) if config.is_enabled("go") else None

    def is_tool_enabled(self, tool: Tool) -> bool:
        return self.config.is_enabled(TOOL_ECOSYSTEM[tool].value)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Definitions of the tools whose ecosystem is enabled."""
        return [d for d in TOOL_DEFINITIONS if self.is_tool_enabled(Tool(d["name"]))]

    def _route(self, tool: Tool) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
        routes = {
            Tool.CHECK_NPM_VERSIONS: lambda: self.npm_handler.get_latest_version,
            Tool.SEARCH_NPM_PACKAGES: lambda: self.npm_handler.search_packages,
            Tool.CHECK_PYTHON_VERSIONS: lambda: self.python_handler.get_latest_version_from_requirements,
            Tool.CHECK_PYPROJECT_VERSIONS: lambda: self.python_handler.get_latest_version,
            Tool.CHECK_MAVEN_VERSIONS: lambda: self.java_handler.get_latest_version_from_maven,
            Tool.CHECK_GRADLE_VERSIONS: lambda: self.java_handler.get_latest_version,
            Tool.CHECK_GO_VERSIONS: lambda: self.go_handler.get_latest_version,
        }
        return routes[tool]()

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate and dispatch one tool call.

        Raises:
            McpError: INVALID_PARAMS when no arguments were supplied,
                METHOD_NOT_FOUND for unknown or disabled tools. Handler
                errors propagate unchanged.
        """
        if not arguments:
            raise invalid_params("Missing arguments")
        tool = _tool_from_name(name)
        if tool is None:
            raise method_not_found(f"Unknown tool: {name}")
        if not self.is_tool_enabled(tool):
            raise method_not_found(f"Tool {name} is not enabled")
        logger.info("Calling tool %s", name, extra=extra_context(event="tool_call", tool=name))
        return self._route(tool)(arguments)


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Wire the dispatcher into a low-level MCP server."""
    server: Server = Server(Constants.SERVER_NAME, version=Constants.SERVER_VERSION)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return [types.Tool(**definition) for definition in dispatcher.list_tools()]

    async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
        try:
            payload = await asyncio.to_thread(dispatcher.call_tool, req.params.name, req.params.arguments)
        except McpError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected error in tool %s", req.params.name)
            raise internal_error(f"Unexpected error in {req.params.name}: {exc}") from exc
        content = [types.TextContent(type="text", text=block["text"]) for block in payload["content"]]
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    # Registered directly so McpErrors reach the client as JSON-RPC errors
    # rather than being folded into an isError tool result.
    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


async def _open_stdin() -> Optional[StdinLines]:
    try:
        return await StdinLines.open()
    except (ValueError, OSError, NotImplementedError) as exc:
        logger.debug("stdin is not a pipe (%s); using the SDK reader", exc)
        return None


async def _serve(server: Server) -> None:
    """Serve until the client closes stdin or SIGINT/SIGTERM arrives."""
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()
    installed = []
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, stop_event.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # No loop signal support (Windows); KeyboardInterrupt still applies.
            pass

    stdin = await _open_stdin()

    async def _run() -> None:
        async with stdio_server(stdin=stdin) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    run_task = asyncio.create_task(_run())
    stop_task = asyncio.create_task(stop_event.wait())
    try:
        await asyncio.wait({run_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if stop_event.is_set():
            logger.info("Shutdown signal received, stopping...")
            run_task.cancel()
        stop_task.cancel()
        await asyncio.wait({run_task})
        if not run_task.cancelled():
            run_task.result()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        if stdin is not None:
            stdin.close()


def run_mcp_server(args) -> None:
    configure_logging(getattr(args, "LOG_LEVEL", "INFO"), getattr(args, "LOG_FILE", None))
    config = build_config(args)
    logger.info("Enabled languages/frameworks: %s", ", ".join(sorted(config.enabled)) or "(none)")

    server = create_server(ToolDispatcher(config))
    try:
        logger.info("Package Version MCP server running on stdio")
        asyncio.run(_serve(server))
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
