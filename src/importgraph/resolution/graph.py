"""Resolution graph: creates resolutions and guarantees one resolution per URI."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Union
from urllib.parse import quote

from ..common.logging_utils import extra_context, is_debug_enabled
from ..fs.base import PackageDir, PackageFS
from ..package.package_json import parse_range, satisfies
from ..specifier.models import (
    EntryImport,
    Import,
    ImportKind,
    PackageImport,
    PrivateImport,
    URIImport,
)
from ..specifier.uris import trim_trailing_slash, uri_to_import
from .base import ImportResolution
from .generic import GenericResolution
from .package import PackageResolution
from .sub_package import PackageEntryResolution, PackageFileResolution, PackagePrivateResolution
from .uri import URIResolution

logger = logging.getLogger(__name__)

ResolutionFactory = Callable[[str], Awaitable[Optional[ImportResolution]]]

# Characters `encodeURIComponent` leaves as is, besides alphanumerics and `-_.~`.
_COMPONENT_SAFE = "!*'()"


class ResolutionGraph:
    """Owner of all resolutions created for one root module.

    Resolutions are cached by URI. Creation of each one runs as a single task
    shared by all concurrent requests for the same URI, so no URI ever gets
    two resolutions. Packages are additionally indexed by name.
    """

    def __init__(self, fs: PackageFS, create_root: Callable[[ResolutionGraph], ImportResolution]):
        self._fs = fs
        self._by_uri: Dict[str, ImportResolution] = {}
        self._pending: Dict[str, asyncio.Future] = {}
        self._by_name: Dict[str, List[PackageResolution]] = {}
        self._initialized = False
        self._root = create_root(self)

    def _init(self) -> None:
        if not self._initialized:
            self._initialized = True
            self._add_resolution(self._root.uri, self._root)

    @property
    def root(self) -> ImportResolution:
        return self._root

    @property
    def fs(self) -> PackageFS:
        return self._fs

    def recognize_import(self, spec: Union[Import, str]) -> Import:
        return self._fs.recognize_import(spec)

    def by_uri(self, uri: str) -> Optional[ImportResolution]:
        """Find already created resolution by its URI."""
        self._init()
        return self._by_uri.get(uri)

    def packages(self, name: str) -> List[PackageResolution]:
        """List resolved packages with the given name, in resolution order."""
        self._init()
        return list(self._by_name.get(name, ()))

    async def resolve(self, spec: Import) -> ImportResolution:
        """Resolve import specifier not bound to any module.

        URI imports are resolved by URI. Everything else becomes a generic
        resolution within reserved `import:` URI namespace.
        """
        if spec.kind is ImportKind.URI:
            return await self.resolve_uri(spec)

        uri = _generic_uri(spec)

        async def create(_uri: str) -> ImportResolution:
            return GenericResolution(self, uri, spec)

        return await self._resolve(uri, create)

    async def resolve_uri(
        self,
        spec: URIImport,
        create: Optional[ResolutionFactory] = None,
    ) -> ImportResolution:
        """Resolve URI import, creating resolution with the given factory when missing.

        A plain URI resolution is created when there is no factory, or it returns None.
        """
        async def create_or_default(uri: str) -> ImportResolution:
            resolution = await create(uri) if create is not None else None
            return resolution if resolution is not None else URIResolution(self, spec)

        return await self._resolve(spec.spec, create_or_default)

    async def resolve_entry(
        self,
        host: PackageResolution,
        spec: Union[PackageImport, EntryImport],
    ) -> Optional[ImportResolution]:
        """Resolve package or its entry imported by the host package.

        Returns:
            Package or entry resolution, or None if the package can not be found.
        """
        dep = await self._resolve_package_of(host, spec.name)
        if dep is None or not spec.subpath:
            return dep

        subpath = spec.subpath

        async def create(uri: str) -> ImportResolution:
            return PackageEntryResolution(self, dep, uri, subpath)

        return await self.resolve_uri(uri_to_import(PackageEntryResolution.entry_uri(self, dep, subpath)), create)

    async def resolve_private(self, host: PackageResolution, spec: PrivateImport) -> ImportResolution:
        """Resolve private subpath import of the host package."""
        async def create(uri: str) -> ImportResolution:
            return PackagePrivateResolution(self, host, uri, spec)

        return await self.resolve_uri(uri_to_import(PackagePrivateResolution.private_uri(host, spec)), create)

    async def resolve_package_or_file(self, spec: URIImport) -> ImportResolution:
        """Resolve URI to enclosing package, or to a file within it.

        Falls back to plain URI resolution outside of any package.
        """
        uri = trim_trailing_slash(spec.spec)
        if uri != spec.spec:
            spec = uri_to_import(uri)
        return await self.resolve_uri(spec, self._create_package_or_file)

    async def _create_package_or_file(self, uri: str) -> Optional[ImportResolution]:
        package_dir = await self._fs.find_package_dir(uri)
        if package_dir is None:
            return None

        package_uri = trim_trailing_slash(package_dir.uri)
        if package_uri == uri:
            # Package imported directly rather than its file.
            return PackageResolution(self, uri, package_info=package_dir.package_info)

        host = (await self._resolve_package_dir(package_dir)).as_package()
        if host is None or not uri.startswith(host.resolution_base_uri):
            return None

        return PackageFileResolution(self, host, uri, "./" + uri[len(host.resolution_base_uri):])

    async def _resolve_package_dir(self, package_dir: PackageDir) -> ImportResolution:
        async def create(uri: str) -> ImportResolution:
            return PackageResolution(self, uri, package_info=package_dir.package_info)

        return await self.resolve_uri(uri_to_import(trim_trailing_slash(package_dir.uri)), create)

    async def _resolve_package_of(self, host: PackageResolution, name: str) -> Optional[PackageResolution]:
        if name == host.name:
            return host  # Self-reference.

        for _kind, deps in host.declared_dependencies():
            npm_range = parse_range(deps.get(name))
            if npm_range is None:
                continue
            for candidate in self._by_name.get(name, ()):
                if satisfies(candidate.version, npm_range):
                    return candidate

        module_uri = await self._fs.resolve_name(host, name)
        if module_uri is None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Package %s not found for %s",
                    name,
                    host.uri,
                    extra=extra_context(event="lookup", component="graph", action="resolve_name",
                                        outcome="not_found"),
                )
            return None

        return (await self.resolve_package_or_file(uri_to_import(module_uri))).host

    async def _resolve(self, uri: str, create: Callable[[str], Awaitable[ImportResolution]]) -> ImportResolution:
        self._init()

        found = self._by_uri.get(uri)
        if found is not None:
            return found

        task = self._pending.get(uri)
        if task is None:
            task = asyncio.ensure_future(self._create(uri, create))
            self._pending[uri] = task
        elif is_debug_enabled(logger):
            logger.debug(
                "Awaiting resolution of %s in progress",
                uri,
                extra=extra_context(event="cache", component="graph", action="resolve", outcome="pending"),
            )

        # Shielded, so that cancelled caller does not cancel shared task.
        return await asyncio.shield(task)

    async def _create(self, uri: str, create: Callable[[str], Awaitable[ImportResolution]]) -> ImportResolution:
        try:
            resolution = await create(uri)
            self._add_resolution(uri, resolution)
        finally:
            self._pending.pop(uri, None)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved %s as %s",
                uri,
                type(resolution).__name__,
                extra=extra_context(event="cache", component="graph", action="resolve", outcome="created"),
            )
        return resolution

    def _add_resolution(self, uri: str, resolution: ImportResolution) -> None:
        self._by_uri[uri] = resolution

        pkg = resolution.as_package()
        if pkg is not None:
            self._by_name.setdefault(pkg.name, []).append(pkg)


def _generic_uri(spec: Import) -> str:
    kind = spec.kind
    if kind is ImportKind.PATH:
        payload = spec.uri
    elif kind is ImportKind.PRIVATE:
        payload = spec.spec[1:]
    elif kind is ImportKind.SYNTHETIC:
        payload = quote(spec.spec[1:], safe=_COMPONENT_SAFE)
    elif kind is ImportKind.UNKNOWN:
        payload = quote(spec.spec, safe=_COMPONENT_SAFE)
    else:
        payload = spec.spec
    return f"import:{kind.value}:{payload}"
