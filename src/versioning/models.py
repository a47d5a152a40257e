"""Data models for version lookups and dependency declarations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class PackageVersion:
    """Lookup outcome for one package, serialized into tool responses."""
    name: str
    latest_version: str
    registry: str  # npm|pypi|maven|gradle|go
    current_version: Optional[str] = None
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Return the wire shape; optional fields are omitted when unset."""
        out: Dict[str, str] = {"name": self.name}
        if self.current_version:
            out["currentVersion"] = self.current_version
        out["latestVersion"] = self.latest_version
        out["registry"] = self.registry
        if self.label:
            out["label"] = self.label
        return out


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


@dataclass(frozen=True)
class MavenDependency:
    """Dependency entry from a pom.xml."""
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Optional["MavenDependency"]:
        group_id, artifact_id = _opt_str(raw.get("groupId")), _opt_str(raw.get("artifactId"))
        if not group_id or not artifact_id:
            return None
        return cls(group_id, artifact_id, _opt_str(raw.get("version")), _opt_str(raw.get("scope")))


@dataclass(frozen=True)
class GradleDependency:
    """Dependency entry from a build.gradle file."""
    configuration: str
    group: str
    name: str
    version: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Optional["GradleDependency"]:
        configuration = _opt_str(raw.get("configuration"))
        group, name = _opt_str(raw.get("group")), _opt_str(raw.get("name"))
        if not configuration or not group or not name:
            return None
        return cls(configuration, group, name, _opt_str(raw.get("version")))


@dataclass(frozen=True)
class GoRequire:
    path: str
    version: Optional[str] = None


@dataclass(frozen=True)
class GoReplace:
    old: str
    new: str
    version: Optional[str] = None

    @property
    def is_local(self) -> bool:
        """True when the replacement points at a directory rather than a module."""
        return self.new.startswith(("./", "../", "/"))


@dataclass
class GoModule:
    """Relevant contents of a go.mod file."""
    module: str
    require: List[GoRequire] = field(default_factory=list)
    replace: List[GoReplace] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GoModule":
        require = [
            GoRequire(entry["path"], _opt_str(entry.get("version")))
            for entry in raw.get("require") or []
            if isinstance(entry, dict) and _opt_str(entry.get("path"))
        ]
        replace = [
            GoReplace(entry["old"], entry["new"], _opt_str(entry.get("version")))
            for entry in raw.get("replace") or []
            if isinstance(entry, dict) and _opt_str(entry.get("old")) and _opt_str(entry.get("new"))
        ]
        return cls(module=raw["module"], require=require, replace=replace)


# A pyproject section is either a name -> constraint map or a list of PEP 508 strings.
PyProjectSection = Union[Dict[str, Any], List[str]]


@dataclass
class PyProjectDependencies:
    """Dependency tables gathered from a pyproject.toml."""
    dependencies: Optional[PyProjectSection] = None
    optional_dependencies: Dict[str, PyProjectSection] = field(default_factory=dict)
    dev_dependencies: Optional[PyProjectSection] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PyProjectDependencies":
        optional = raw.get("optional-dependencies") or {}
        return cls(
            dependencies=raw.get("dependencies"),
            optional_dependencies=dict(optional) if isinstance(optional, dict) else {},
            dev_dependencies=raw.get("dev-dependencies"),
        )
