"""Node.js-compatible import resolution graph with dependency classification."""

from .errors import ConfigError, ImportGraphError, PackageNotFoundError
from .fs import NodePackageFS, PackageDir, PackageFS, VirtualPackageFS, resolve_root_package
from .package import PackageEntryPoint, PackageEntryTargets, PackageInfo
from .resolution import (
    DependencyKind,
    ImportDependency,
    ImportResolution,
    PackageResolution,
    ResolutionGraph,
    SubPackageResolution,
)
from .specifier import Import, ImportKind, recognize_import

__all__ = [
    "ConfigError",
    "ImportGraphError",
    "PackageNotFoundError",
    "NodePackageFS",
    "PackageDir",
    "PackageFS",
    "VirtualPackageFS",
    "resolve_root_package",
    "PackageEntryPoint",
    "PackageEntryTargets",
    "PackageInfo",
    "DependencyKind",
    "ImportDependency",
    "ImportResolution",
    "PackageResolution",
    "ResolutionGraph",
    "SubPackageResolution",
    "Import",
    "ImportKind",
    "recognize_import",
]
