"""JSON Schemas for the MCP tools.

``*_INPUT`` schemas are advertised to clients through ``tools/list``.
``*_SHAPE`` schemas are what handlers enforce: they check the top-level
shape of the arguments only, so that malformed individual entries are
skipped rather than failing the whole batch.
"""

from __future__ import annotations

from typing import Any, Dict

_STRING_MAP = {"type": "object", "additionalProperties": {"type": "string"}}


def _weight(name: str) -> Dict[str, Any]:
    return {
        "type": "number",
        "description": f"Weight of {name} in search results (0-1)",
        "minimum": 0,
        "maximum": 1,
    }


CHECK_NPM_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {**_STRING_MAP, "description": "Dependencies object from package.json"},
    },
    "required": ["dependencies"],
}

CHECK_PYTHON_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "requirements": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of requirements from requirements.txt",
        },
    },
    "required": ["requirements"],
}

CHECK_PYPROJECT_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "object",
            "properties": {
                "dependencies": {**_STRING_MAP, "description": "Project dependencies from pyproject.toml"},
                "optional-dependencies": {
                    "type": "object",
                    "additionalProperties": _STRING_MAP,
                    "description": "Optional dependencies from pyproject.toml",
                },
                "dev-dependencies": {**_STRING_MAP, "description": "Development dependencies from pyproject.toml"},
            },
            "description": "Dependencies object from pyproject.toml",
        },
    },
    "required": ["dependencies"],
}

CHECK_MAVEN_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "groupId": {"type": "string", "description": "Maven group ID"},
                    "artifactId": {"type": "string", "description": "Maven artifact ID"},
                    "version": {"type": "string", "description": "Current version (optional)"},
                    "scope": {"type": "string", "description": "Dependency scope (e.g., compile, test, provided)"},
                },
                "required": ["groupId", "artifactId"],
            },
            "description": "Array of Maven dependencies",
        },
    },
    "required": ["dependencies"],
}

CHECK_GRADLE_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "configuration": {
                        "type": "string",
                        "description": "Gradle configuration (e.g., implementation, testImplementation)",
                    },
                    "group": {"type": "string", "description": "Package group"},
                    "name": {"type": "string", "description": "Package name"},
                    "version": {"type": "string", "description": "Current version (optional)"},
                },
                "required": ["configuration", "group", "name"],
            },
            "description": "Array of Gradle dependencies",
        },
    },
    "required": ["dependencies"],
}

CHECK_GO_VERSIONS_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "object",
            "properties": {
                "module": {"type": "string", "description": "Module name"},
                "require": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "path": {"type": "string", "description": "Package import path"},
                            "version": {"type": "string", "description": "Current version"},
                        },
                        "required": ["path"],
                    },
                    "description": "Required dependencies",
                },
                "replace": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "old": {"type": "string", "description": "Original package path"},
                            "new": {"type": "string", "description": "Replacement package path"},
                            "version": {"type": "string", "description": "Current version"},
                        },
                        "required": ["old", "new"],
                    },
                    "description": "Replacement dependencies",
                },
            },
            "required": ["module"],
            "description": "Dependencies from go.mod",
        },
    },
    "required": ["dependencies"],
}

SEARCH_NPM_PACKAGES_INPUT: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Search query text"},
        "size": {
            "type": "number",
            "description": "Number of results to return (max 250)",
            "minimum": 1,
            "maximum": 250,
        },
        "quality": _weight("quality"),
        "popularity": _weight("popularity"),
        "maintenance": _weight("maintenance"),
    },
    "required": ["query"],
}


NPM_DEPENDENCIES_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {"dependencies": {"type": "object"}},
    "required": ["dependencies"],
}

REQUIREMENTS_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {"requirements": {"type": "array"}},
    "required": ["requirements"],
}

PYPROJECT_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "object",
            "properties": {
                "dependencies": {"type": ["object", "array"]},
                "optional-dependencies": {"type": "object"},
                "dev-dependencies": {"type": ["object", "array"]},
            },
        },
    },
    "required": ["dependencies"],
}

JAVA_DEPENDENCIES_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {"dependencies": {"type": "array"}},
    "required": ["dependencies"],
}

GO_MODULE_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependencies": {
            "type": "object",
            "properties": {
                "module": {"type": "string"},
                "require": {"type": "array"},
                "replace": {"type": "array"},
            },
            "required": ["module"],
        },
    },
    "required": ["dependencies"],
}

SEARCH_SHAPE: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "minLength": 1},
        "size": {"type": "number", "minimum": 1},
        "quality": {"type": "number", "minimum": 0, "maximum": 1},
        "popularity": {"type": "number", "minimum": 0, "maximum": 1},
        "maintenance": {"type": "number", "minimum": 0, "maximum": 1},
    },
    "required": ["query"],
}
