"""Package file systems."""

from .base import PackageDir, PackageFS
from .node import NodePackageFS
from .root import resolve_root_package
from .virtual import VirtualPackageFS

__all__ = ["PackageDir", "PackageFS", "NodePackageFS", "VirtualPackageFS", "resolve_root_package"]
