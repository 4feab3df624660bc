"""Resolutions of modules within packages: package entries, files and private imports."""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Optional, Union
from urllib.parse import urlencode

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from ..specifier.models import (
    EntryImport,
    Import,
    ImportKind,
    PathImport,
    PrivateImport,
    SubPackageImport,
    URIImport,
)
from ..specifier.recognizer import encode_path
from ..specifier.uris import uri_to_import
from .base import ImportResolution

if TYPE_CHECKING:
    from .graph import ResolutionGraph
    from .package import PackageResolution

logger = logging.getLogger(__name__)


class SubPackageResolution(ImportResolution):
    """Module within a host package, or the package itself.

    May dereference to another module, e.g. an entry to the file it exports.
    Dereferencing happens once, on first request, and is remembered.
    """

    def __init__(self, graph: ResolutionGraph, uri: str, import_spec: Optional[SubPackageImport]):
        super().__init__(graph, uri, import_spec)
        self._deref_task: Optional[asyncio.Future] = None

    @property
    @abstractmethod
    def host(self) -> PackageResolution:
        """Host package."""

    @property
    @abstractmethod
    def subpath(self) -> str:
        """Path within host package: empty, starting with `/`, or private `#` one."""

    def as_sub_package(self) -> SubPackageResolution:
        return self

    async def resolve_import(self, spec: Union[Import, str]) -> ImportResolution:
        spec = self._graph.recognize_import(spec)
        kind = spec.kind

        if kind is ImportKind.PATH:
            return await self._resolve_path(spec.uri)
        if kind in (ImportKind.PACKAGE, ImportKind.ENTRY):
            found = await self._graph.resolve_entry(self.host, spec)
            if found is not None:
                return found
            return await self._graph.resolve(spec)
        if kind is ImportKind.PRIVATE:
            return await self._graph.resolve_private(self.host, spec)
        if kind is ImportKind.URI:
            return await self._resolve_uri(spec)
        return await self._graph.resolve(spec)

    async def _resolve_uri(self, spec: URIImport) -> ImportResolution:
        package_uri = self.fs.recognize_package_uri(spec)
        if package_uri is not None:
            return await self._resolve_path(package_uri)
        # Non-package URI.
        return await self._graph.resolve_uri(spec)

    async def _resolve_path(self, path: str) -> ImportResolution:
        uri = self.fs.resolve_path(self, path)
        return await self._graph.resolve_package_or_file(uri_to_import(uri))

    async def deref(self) -> ImportResolution:
        if self._deref_task is None:
            self._deref_task = asyncio.ensure_future(self._find_deref())
        return await asyncio.shield(self._deref_task)

    async def _find_deref(self) -> ImportResolution:
        import_spec = self.import_spec
        if import_spec.kind is ImportKind.PATH:
            return self

        host = self.host
        target = await self.fs.deref_entry(host, import_spec)
        if target is None:
            return self

        resolution = await host.resolve_import(target)
        if is_debug_enabled(logger):
            logger.debug(
                "Dereferenced %s to %s",
                self.uri,
                resolution.uri,
                extra=extra_context(event="decision", component="resolution", action="deref",
                                    outcome="redirect", target=target),
            )
        return resolution


class PackageEntryResolution(SubPackageResolution):
    """Package entry point or file imported by package name and subpath."""

    def __init__(self, graph: ResolutionGraph, host: PackageResolution, uri: str, subpath: str):
        host_spec = host.import_spec
        super().__init__(
            graph,
            uri,
            EntryImport(
                spec=host_spec.spec + subpath,
                name=host_spec.name,
                scope=host_spec.scope,
                local=host_spec.local,
                subpath=subpath,
            ),
        )
        self._host = host
        self._subpath = subpath

    @staticmethod
    def entry_uri(graph: ResolutionGraph, host: PackageResolution, subpath: str) -> str:
        return graph.fs.resolve_path(host, encode_path(subpath[1:]))

    @property
    def host(self) -> PackageResolution:
        return self._host

    @property
    def subpath(self) -> str:
        return self._subpath


class PackageFileResolution(SubPackageResolution):
    """File within package, addressed by path or URI."""

    def __init__(self, graph: ResolutionGraph, host: PackageResolution, uri: str, path: str):
        super().__init__(graph, uri, PathImport(spec=path, is_relative=True, path=path, uri=path))
        self._host = host
        self._subpath = path[1:]

    @property
    def host(self) -> PackageResolution:
        return self._host

    @property
    def subpath(self) -> str:
        return self._subpath


class PackagePrivateResolution(SubPackageResolution):
    """Private subpath import (`#name`) of the host package."""

    def __init__(self, graph: ResolutionGraph, host: PackageResolution, uri: str, import_spec: PrivateImport):
        super().__init__(graph, uri, import_spec)
        self._host = host

    @staticmethod
    def private_uri(host: PackageResolution, import_spec: PrivateImport) -> str:
        """Encode private import name as query parameter of host package URI."""
        query = urlencode({Constants.PRIVATE_QUERY_PARAM: import_spec.spec[1:]})
        return f"{host.uri}?{query}"

    @property
    def host(self) -> PackageResolution:
        return self._host

    @property
    def subpath(self) -> str:
        return self.import_spec.spec
