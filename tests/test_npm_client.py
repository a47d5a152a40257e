"""Tests for the npm registry client."""
from unittest.mock import patch

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR

from common.errors import RegistryRequestError
from registry.npm.client import build_search_params, get_package_version, search_packages


class TestGetPackageVersion:
    """Latest dist-tag lookups."""

    @patch('registry.npm.client.http_client.get_json')
    def test_returns_latest_and_strips_caret(self, mock_get_json):
        mock_get_json.return_value = (200, {"dist-tags": {"latest": "4.17.21"}})

        result = get_package_version("lodash", "^4.17.0")

        assert result.to_dict() == {
            "name": "lodash",
            "currentVersion": "4.17.0",
            "latestVersion": "4.17.21",
            "registry": "npm",
        }
        assert mock_get_json.call_args[0][0] == "https://registry.npmjs.org/lodash"

    @patch('registry.npm.client.http_client.get_json')
    def test_strips_tilde(self, mock_get_json):
        mock_get_json.return_value = (200, {"dist-tags": {"latest": "1.3.0"}})

        assert get_package_version("left-pad", "~1.2.3").current_version == "1.2.3"

    @patch('registry.npm.client.http_client.get_json')
    def test_other_ranges_pass_through(self, mock_get_json):
        mock_get_json.return_value = (200, {"dist-tags": {"latest": "2.0.0"}})

        assert get_package_version("a", ">=1.0.0").current_version == ">=1.0.0"
        assert get_package_version("a", "^^1.0.0").current_version == "^1.0.0"

    @patch('registry.npm.client.http_client.get_json')
    def test_no_current_version(self, mock_get_json):
        mock_get_json.return_value = (200, {"dist-tags": {"latest": "2.0.0"}})

        out = get_package_version("a").to_dict()

        assert "currentVersion" not in out
        assert out["latestVersion"] == "2.0.0"

    @patch('registry.npm.client.http_client.get_json')
    def test_scoped_name_is_encoded(self, mock_get_json):
        mock_get_json.return_value = (200, {"dist-tags": {"latest": "7.0.0"}})

        result = get_package_version("@babel/core", "^7.0.0")

        assert mock_get_json.call_args[0][0] == "https://registry.npmjs.org/%40babel%2Fcore"
        assert result.name == "@babel/core"

    @patch('registry.npm.client.http_client.get_json')
    def test_missing_dist_tags_is_internal_error(self, mock_get_json):
        mock_get_json.return_value = (404, None)

        with pytest.raises(McpError) as excinfo:
            get_package_version("does-not-exist-xyz", "1.0.0")

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert "does-not-exist-xyz" in excinfo.value.error.message

    @patch('registry.npm.client.http_client.get_json')
    def test_network_error_is_internal_error(self, mock_get_json):
        mock_get_json.side_effect = RegistryRequestError("npm connection error")

        with pytest.raises(McpError) as excinfo:
            get_package_version("lodash")

        assert excinfo.value.error.code == INTERNAL_ERROR


class TestSearchPackages:
    """npm search endpoint."""

    def test_size_is_capped(self):
        assert build_search_params("react", size=1000)["size"] == "250"

    def test_default_size_and_optional_weights(self):
        params = build_search_params("react")
        assert params == {"text": "react", "size": "20"}

        params = build_search_params("react", size=5, quality=0.5, maintenance=0)
        assert params["quality"] == "0.5"
        assert params["maintenance"] == "0"
        assert "popularity" not in params

    @patch('registry.npm.client.http_client.get_json')
    def test_outgoing_query_is_capped(self, mock_get_json):
        mock_get_json.return_value = (200, {"objects": []})

        search_packages("react", size=1000)

        assert mock_get_json.call_args[1]["params"]["size"] == "250"
        assert mock_get_json.call_args[0][0] == "https://registry.npmjs.org/-/v1/search"

    @patch('registry.npm.client.http_client.get_json')
    def test_maps_hits(self, mock_get_json):
        mock_get_json.return_value = (200, {
            "objects": [
                {
                    "package": {
                        "name": "react",
                        "version": "18.3.1",
                        "description": "React is a JavaScript library",
                        "publisher": {"username": "fb"},
                        "date": "2024-04-26T00:00:00.000Z",
                        "links": {"npm": "https://www.npmjs.com/package/react"},
                    },
                    "score": {"final": 0.9},
                }
            ]
        })

        hits = search_packages("react")

        assert hits == [{
            "name": "react",
            "version": "18.3.1",
            "description": "React is a JavaScript library",
            "keywords": [],
            "score": {"final": 0.9},
            "publisher": {"username": "fb"},
            "date": "2024-04-26T00:00:00.000Z",
            "links": {"npm": "https://www.npmjs.com/package/react"},
        }]

    @patch('registry.npm.client.http_client.get_json')
    def test_skips_hits_without_package_object(self, mock_get_json):
        mock_get_json.return_value = (200, {
            "objects": [
                {"package": "react", "score": {"final": 0.1}},
                {"score": {"final": 0.2}},
                "not-an-object",
                {"package": {"name": "preact", "version": "10.0.0"}, "score": {"final": 0.5}},
            ]
        })

        hits = search_packages("react")

        assert [hit["name"] for hit in hits] == ["preact"]

    @patch('registry.npm.client.http_client.get_json')
    def test_non_200_is_internal_error(self, mock_get_json):
        mock_get_json.return_value = (503, None)

        with pytest.raises(McpError) as excinfo:
            search_packages("react")

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert "status 503" in excinfo.value.error.message

    @patch('registry.npm.client.http_client.get_json')
    def test_network_error_is_internal_error(self, mock_get_json):
        mock_get_json.side_effect = RegistryRequestError("timed out")

        with pytest.raises(McpError) as excinfo:
            search_packages("react")

        assert excinfo.value.error.message == "Failed to search NPM registry: timed out"
