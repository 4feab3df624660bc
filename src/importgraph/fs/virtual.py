"""In-memory package file system.

Packages are registered programmatically under `package:` URIs. Used to seed
resolution graphs without touching the disk, e.g. in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from ..constants import Constants
from ..package.info import PackageInfo
from ..package.package_json import parse_range, satisfies
from ..specifier.models import ImportKind, SubPackageImport, URIImport
from ..specifier.uris import compose_uri, uri_to_import
from .base import PackageFS

if TYPE_CHECKING:
    from ..resolution.base import ImportResolution
    from ..resolution.package import PackageResolution

_HTTP_BASE = "http://localhost"
_SCHEME = "package"


@dataclass
class VirtualPackage:
    """Package registered in virtual file system."""
    uri: str
    package_info: PackageInfo
    deref: Dict[str, str] = field(default_factory=dict)


class VirtualPackageFS(PackageFS):
    """Virtual file system with packages addressed by `package:` URIs."""

    def __init__(self, root: str = Constants.VIRTUAL_ROOT_URI):
        self._root = self._to_package_uri(root)
        self._by_uri: Dict[str, VirtualPackage] = {}
        self._by_name: Dict[str, Dict[str, VirtualPackage]] = {}

    @property
    def root(self) -> str:
        return self._root

    def add_root(
        self,
        package_json: Union[Mapping[str, Any], PackageInfo],
        allow_duplicate: bool = False,
        deref: Optional[Mapping[str, str]] = None,
    ) -> VirtualPackageFS:
        """Register root package."""
        return self.add_package(package_json, self._root, allow_duplicate=allow_duplicate, deref=deref)

    def add_package(
        self,
        package_json: Union[Mapping[str, Any], PackageInfo],
        uri: Optional[str] = None,
        allow_duplicate: bool = False,
        deref: Optional[Mapping[str, str]] = None,
    ) -> VirtualPackageFS:
        """Register package.

        A package registered at the same URI is replaced. So is the package
        with the same name and version, unless duplicates allowed.

        Args:
            package_json: Package contents or info.
            uri: Package URI. `package:<name>/<version>` by default.
            allow_duplicate: Keep previously registered package with the same name and version.
            deref: Redirects of package (`""`), entries (`/subpath`) and private imports (`#name`).

        Returns:
            This instance.
        """
        package_info = PackageInfo.from_json(package_json)
        if uri is None:
            uri = f"{_SCHEME}:{package_info.name}/{package_info.version}"
        else:
            uri = self._to_package_uri(uri)

        previous = self._by_uri.get(uri)
        if previous is not None:
            self._forget_name(previous)

        by_version = self._by_name.setdefault(package_info.name, {})
        existing = by_version.get(package_info.version)
        if existing is not None and not allow_duplicate:
            self._by_uri.pop(existing.uri, None)

        package = VirtualPackage(uri=uri, package_info=package_info, deref=dict(deref or {}))
        by_version[package_info.version] = package
        self._by_uri[uri] = package

        return self

    def _forget_name(self, package: VirtualPackage) -> None:
        info = package.package_info
        by_version = self._by_name.get(info.name)
        if by_version is not None and by_version.get(info.version) is package:
            del by_version[info.version]
            if not by_version:
                del self._by_name[info.name]

    def recognize_package_uri(self, import_spec: URIImport) -> Optional[str]:
        return import_spec.spec if import_spec.scheme == _SCHEME else None

    async def load_package(self, uri: str) -> Optional[PackageInfo]:
        package = self._by_uri.get(uri)
        return package.package_info if package is not None else None

    def parent_dir(self, uri: str) -> Optional[str]:
        http_uri = self._to_http_uri(uri)
        if not http_uri.endswith("/"):
            http_uri += "/"

        parent_uri = compose_uri("..", http_uri)
        if parent_uri == http_uri:
            return None
        return self._to_package_uri(parent_uri)

    def resolve_path(self, relative_to: ImportResolution, path: str) -> str:
        return self._to_package_uri(compose_uri(path, self._to_http_uri(relative_to.resolution_base_uri)))

    async def resolve_name(self, relative_to: PackageResolution, name: str) -> Optional[str]:
        info = relative_to.package_info
        for field_name in ("dependencies", "peerDependencies", "devDependencies"):
            npm_range = parse_range(info.dependencies(field_name).get(name))
            if npm_range is None:
                continue
            for version, package in self._by_name.get(name, {}).items():
                if satisfies(version, npm_range):
                    return package.uri
        return None

    async def deref_entry(self, host: PackageResolution, import_spec: SubPackageImport) -> Optional[str]:
        package = self._by_uri.get(host.uri)
        if package is None:
            return None
        if import_spec.kind is ImportKind.PACKAGE:
            key = ""
        elif import_spec.kind is ImportKind.ENTRY:
            key = import_spec.subpath
        else:
            key = import_spec.spec
        return package.deref.get(key)

    @staticmethod
    def _to_package_uri(uri: str) -> str:
        path = uri_to_import(uri).path
        if path.endswith("/"):
            path = path[:-1]
        return f"{_SCHEME}:" + (path[1:] if path.startswith("/") else path)

    @staticmethod
    def _to_http_uri(uri: str) -> str:
        path = uri_to_import(uri).path
        return _HTTP_BASE + (path if path.startswith("/") else "/" + path)
