"""Import resolutions and the graph owning them."""

from .base import ImportResolution
from .generic import GenericResolution
from .graph import ResolutionGraph
from .models import DependencyKind, ImportDependency
from .package import PackageResolution
from .sub_package import (
    PackageEntryResolution,
    PackageFileResolution,
    PackagePrivateResolution,
    SubPackageResolution,
)
from .uri import URIResolution

__all__ = [
    "ImportResolution",
    "GenericResolution",
    "ResolutionGraph",
    "DependencyKind",
    "ImportDependency",
    "PackageResolution",
    "PackageEntryResolution",
    "PackageFileResolution",
    "PackagePrivateResolution",
    "SubPackageResolution",
    "URIResolution",
]
