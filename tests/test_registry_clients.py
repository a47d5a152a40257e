"""Tests for the PyPI, Maven Central and Go proxy clients."""
from unittest.mock import patch

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR

from common.errors import RegistryRequestError
from registry.go.client import escape_module_path, get_module_version
from registry.maven.client import build_query, get_artifact_version
from registry.pypi.client import get_package_version as pypi_get_package_version


class TestPyPIClient:

    @patch('registry.pypi.client.http_client.get_json')
    def test_url_uses_normalized_name(self, mock_get_json):
        """Flask_RESTful should query pypi as flask-restful but report the given name."""
        mock_get_json.return_value = (200, {"info": {"version": "0.3.10"}})

        result = pypi_get_package_version("Flask_RESTful", "0.3")

        assert mock_get_json.call_args[0][0] == "https://pypi.org/pypi/flask-restful/json"
        assert result.to_dict() == {
            "name": "Flask_RESTful",
            "currentVersion": "0.3",
            "latestVersion": "0.3.10",
            "registry": "pypi",
        }

    @patch('registry.pypi.client.http_client.get_json')
    def test_label_is_kept(self, mock_get_json):
        mock_get_json.return_value = (200, {"info": {"version": "8.0.0"}})

        result = pypi_get_package_version("pytest", label="dev-dependencies")

        assert result.to_dict()["label"] == "dev-dependencies"

    @patch('registry.pypi.client.http_client.get_json')
    def test_missing_project(self, mock_get_json):
        mock_get_json.return_value = (404, None)

        with pytest.raises(McpError) as excinfo:
            pypi_get_package_version("no-such-project")

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert excinfo.value.error.message == "Failed to fetch PyPI package no-such-project"


class TestMavenClient:

    def test_query(self):
        assert build_query("org.slf4j", "slf4j-api") == {
            "q": 'g:"org.slf4j" AND a:"slf4j-api"',
            "rows": 1,
            "wt": "json",
        }

    @patch('registry.maven.client.http_client.get_json')
    def test_latest_version(self, mock_get_json):
        mock_get_json.return_value = (200, {
            "response": {"numFound": 1, "docs": [{"id": "org.slf4j:slf4j-api", "latestVersion": "2.0.13"}]}
        })

        result = get_artifact_version("org.slf4j", "slf4j-api", "1.7.36", label="compile")

        assert result.to_dict() == {
            "name": "org.slf4j:slf4j-api",
            "currentVersion": "1.7.36",
            "latestVersion": "2.0.13",
            "registry": "maven",
            "label": "compile",
        }

    @patch('registry.maven.client.http_client.get_json')
    def test_gradle_registry_tag(self, mock_get_json):
        mock_get_json.return_value = (200, {"response": {"docs": [{"latestVersion": "33.2.1-jre"}]}})

        result = get_artifact_version("com.google.guava", "guava", registry="gradle")

        assert result.registry == "gradle"

    @patch('registry.maven.client.http_client.get_json')
    def test_no_docs(self, mock_get_json):
        mock_get_json.return_value = (200, {"response": {"numFound": 0, "docs": []}})

        with pytest.raises(McpError) as excinfo:
            get_artifact_version("com.example", "missing")

        assert excinfo.value.error.message == "Failed to fetch maven package com.example:missing"


class TestGoClient:

    def test_escape_module_path(self):
        assert escape_module_path("github.com/Azure/azure-sdk-for-go") == "github.com/!azure/azure-sdk-for-go"
        assert escape_module_path("golang.org/x/text") == "golang.org/x/text"

    @patch('registry.go.client.http_client.get_json')
    def test_latest(self, mock_get_json):
        mock_get_json.return_value = (200, {"Version": "v1.9.1", "Time": "2023-05-01T00:00:00Z"})

        result = get_module_version("github.com/Sirupsen/logrus", "v1.8.0")

        assert mock_get_json.call_args[0][0] == "https://proxy.golang.org/github.com/!sirupsen/logrus/@latest"
        assert result.to_dict() == {
            "name": "github.com/Sirupsen/logrus",
            "currentVersion": "v1.8.0",
            "latestVersion": "v1.9.1",
            "registry": "go",
        }

    @patch('registry.go.client.http_client.get_json')
    def test_network_error(self, mock_get_json):
        mock_get_json.side_effect = RegistryRequestError("go connection error")

        with pytest.raises(McpError) as excinfo:
            get_module_version("example.com/mod")

        assert excinfo.value.error.code == INTERNAL_ERROR
