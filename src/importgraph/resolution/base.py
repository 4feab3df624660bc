"""Base class of resolved imports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

from ..specifier.models import AMBIENT_KINDS, Import
from .models import DependencyKind, ImportDependency

if TYPE_CHECKING:
    from ..fs.base import PackageFS
    from .graph import ResolutionGraph
    from .package import PackageResolution
    from .sub_package import SubPackageResolution


class ImportResolution(ABC):
    """Imported module resolution.

    May represent a package, a file within it, a virtual module, some URI, or
    anything else. Identified by its URI, unique within a resolution graph.
    """

    def __init__(self, graph: ResolutionGraph, uri: str, import_spec: Optional[Import]):
        self._graph = graph
        self._uri = uri
        self._import_spec = import_spec

    @property
    def graph(self) -> ResolutionGraph:
        return self._graph

    @property
    def fs(self) -> PackageFS:
        return self._graph.fs

    @property
    def root(self) -> ImportResolution:
        """Root module resolution, typically the root package."""
        return self._graph.root

    @property
    def host(self) -> Optional[PackageResolution]:
        """Host package. Only defined for packages and sub-packages."""
        return None

    @property
    def uri(self) -> str:
        """Unique URI of imported module."""
        return self._uri

    @property
    def resolution_base_uri(self) -> str:
        """URI to resolve paths against. The module URI by default."""
        return self._uri

    @property
    def import_spec(self) -> Import:
        """Import specifier this module resolved from."""
        return self._import_spec

    @abstractmethod
    async def resolve_import(self, spec: Union[Import, str]) -> ImportResolution:
        """Resolve another module imported by this one.

        Args:
            spec: Import specifier, either recognized or raw.

        Returns:
            Imported module resolution.
        """

    def resolve_dependency(
        self,
        on: ImportResolution,
        via: Optional[ImportResolution] = None,
    ) -> Optional[ImportDependency]:
        """Resolve dependency of this module on another one.

        Args:
            on: The module to resolve dependency on.
            via: Intermediate module to look for transitive dependency through.

        Returns:
            Dependency descriptor, or None if this module does not depend on another one.
        """
        if on.uri == self.uri:
            return ImportDependency(DependencyKind.SELF, on)

        host = self.host
        if host is not None:
            on_host = on.host
            if on_host is not None and on_host.uri == host.uri:
                # Another module of the same package.
                return ImportDependency(DependencyKind.SELF, on)
            if host is not self:
                return host.resolve_dependency(on, via=via)

        kind = on.import_spec.kind
        if kind in AMBIENT_KINDS:
            return ImportDependency(DependencyKind(kind.value), on)

        return None

    def as_package(self) -> Optional[PackageResolution]:
        """Represent this resolution as package one, if possible."""
        return None

    def as_sub_package(self) -> Optional[SubPackageResolution]:
        """Represent this resolution as sub-package one, if possible."""
        return None

    async def deref(self) -> ImportResolution:
        """Find the resolution this one redirects to. This one by default."""
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._uri!r})"
