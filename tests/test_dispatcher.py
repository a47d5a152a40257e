"""Tests for tool listing, routing and the enable list."""
import asyncio
import json
from unittest.mock import patch

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND

from cli_config import ServerConfig, build_config
from cli_mcp import TOOL_DEFINITIONS, TOOL_ECOSYSTEM, Tool, ToolDispatcher, create_server
from versioning.models import PackageVersion

ALL_TOOLS = [d["name"] for d in TOOL_DEFINITIONS]


def _dispatcher(enabled=None):
    if enabled is None:
        return ToolDispatcher(ServerConfig())
    return ToolDispatcher(ServerConfig(enabled=frozenset(enabled)))


def test_every_tool_has_an_ecosystem_and_definition():
    assert set(TOOL_ECOSYSTEM) == set(Tool)
    assert ALL_TOOLS == [t.value for t in Tool]


def test_all_tools_listed_by_default():
    tools = _dispatcher().list_tools()

    assert [t["name"] for t in tools] == ALL_TOOLS
    search = next(t for t in tools if t["name"] == "search_npm_packages")
    assert search["inputSchema"]["properties"]["size"]["maximum"] == 250
    assert search["inputSchema"]["required"] == ["query"]


def test_disabled_ecosystem_removed_from_listing():
    names = [t["name"] for t in _dispatcher({"python", "go"}).list_tools()]

    assert names == ["check_python_versions", "check_pyproject_versions", "check_go_versions"]


def test_handlers_constructed_lazily():
    dispatcher = _dispatcher({"gradle"})

    assert dispatcher.java_handler is not None
    assert dispatcher.npm_handler is None
    assert dispatcher.python_handler is None
    assert dispatcher.go_handler is None


def test_disabled_tool_is_method_not_found():
    dispatcher = _dispatcher({"python"})

    with pytest.raises(McpError) as excinfo:
        dispatcher.call_tool("check_npm_versions", {"dependencies": {"lodash": "^4.17.0"}})

    assert excinfo.value.error.code == METHOD_NOT_FOUND
    assert excinfo.value.error.message == "Tool check_npm_versions is not enabled"


def test_maven_disabled_while_gradle_enabled():
    dispatcher = _dispatcher({"gradle"})

    with pytest.raises(McpError) as excinfo:
        dispatcher.call_tool("check_maven_versions", {"dependencies": []})

    assert excinfo.value.error.code == METHOD_NOT_FOUND


@pytest.mark.parametrize("arguments", [None, {}])
def test_missing_arguments_is_invalid_params(arguments):
    with pytest.raises(McpError) as excinfo:
        _dispatcher().call_tool("check_npm_versions", arguments)

    assert excinfo.value.error.code == INVALID_PARAMS


def test_unknown_tool_is_method_not_found():
    with pytest.raises(McpError) as excinfo:
        _dispatcher().call_tool("check_cargo_versions", {"dependencies": {}})

    assert excinfo.value.error.code == METHOD_NOT_FOUND
    assert "check_cargo_versions" in excinfo.value.error.message


@patch('handlers.npm.npm_client.get_package_version')
def test_routes_to_npm_handler(mock_lookup):
    mock_lookup.return_value = PackageVersion(
        name="lodash", latest_version="4.17.21", registry="npm", current_version="4.17.0"
    )

    response = _dispatcher().call_tool("check_npm_versions", {"dependencies": {"lodash": "^4.17.0"}})

    assert json.loads(response["content"][0]["text"]) == [
        {"name": "lodash", "currentVersion": "4.17.0", "latestVersion": "4.17.21", "registry": "npm"}
    ]


def test_handler_errors_propagate_unchanged():
    with pytest.raises(McpError) as excinfo:
        _dispatcher().call_tool("check_maven_versions", {"dependencies": "not-a-list"})

    assert excinfo.value.error.code == INVALID_PARAMS


def test_dispatcher_from_environment():
    config = build_config(environ={"PV_ENABLED_LANGUAGES_FRAMEWORKS": "NPM, Go"})
    names = [t["name"] for t in ToolDispatcher(config).list_tools()]

    assert names == ["check_npm_versions", "check_go_versions", "search_npm_packages"]


class TestServerWiring:
    """The MCP server object built around the dispatcher."""

    def test_list_tools_request(self):
        server = create_server(_dispatcher({"npm"}))
        handler = server.request_handlers[types.ListToolsRequest]

        result = asyncio.run(handler(types.ListToolsRequest(method="tools/list")))

        assert [t.name for t in result.root.tools] == ["check_npm_versions", "search_npm_packages"]

    @patch('handlers.npm.npm_client.get_package_version')
    def test_call_tool_request(self, mock_lookup):
        mock_lookup.return_value = PackageVersion(name="lodash", latest_version="4.17.21", registry="npm")
        server = create_server(_dispatcher())
        handler = server.request_handlers[types.CallToolRequest]
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(
                name="check_npm_versions", arguments={"dependencies": {"lodash": "4.17.0"}}
            ),
        )

        result = asyncio.run(handler(request))

        assert result.root.isError is False
        assert json.loads(result.root.content[0].text)[0]["latestVersion"] == "4.17.21"

    def test_call_tool_request_error_is_mcp_error(self):
        server = create_server(_dispatcher({"python"}))
        handler = server.request_handlers[types.CallToolRequest]
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="search_npm_packages", arguments={"query": "x"}),
        )

        with pytest.raises(McpError) as excinfo:
            asyncio.run(handler(request))

        assert excinfo.value.error.code == METHOD_NOT_FOUND
