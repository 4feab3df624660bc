"""Package resolution and dependency classification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from ..common.logging_utils import extra_context, is_debug_enabled
from ..errors import PackageNotFoundError
from ..package.info import PackageInfo
from ..package.package_json import parse_range, satisfies
from ..specifier.models import ImportKind, PackageImport
from ..specifier.recognizer import recognize_import
from ..specifier.uris import dir_uri
from .base import ImportResolution
from .models import AMBIENT_DEPENDENCY_KINDS, DECLARED_KINDS, DependencyKind, ImportDependency
from .sub_package import SubPackageResolution

if TYPE_CHECKING:
    from .graph import ResolutionGraph

logger = logging.getLogger(__name__)


class PackageResolution(SubPackageResolution):
    """Resolved package. Its own host.

    Classifies dependencies of the package on other ones and remembers the
    classification per target package.
    """

    def __init__(
        self,
        graph: ResolutionGraph,
        uri: str,
        import_spec: Optional[PackageImport] = None,
        package_info: Optional[PackageInfo] = None,
    ):
        super().__init__(graph, uri, import_spec)
        self._package_info = package_info
        self._declared: Optional[List[Tuple[DependencyKind, Mapping[str, str]]]] = None
        self._dependencies: Dict[str, Optional[DependencyKind]] = {}

    @property
    def host(self) -> PackageResolution:
        return self

    @property
    def subpath(self) -> str:
        return ""

    @property
    def resolution_base_uri(self) -> str:
        return dir_uri(self.uri)

    @property
    def package_info(self) -> PackageInfo:
        """Package metadata.

        Raises:
            PackageNotFoundError: If metadata could not be loaded for the package.
        """
        if self._package_info is None:
            raise PackageNotFoundError(self.uri)
        return self._package_info

    @property
    def import_spec(self) -> PackageImport:
        if self._import_spec is None:
            self._import_spec = _package_import_spec(self.package_info.name)
        return self._import_spec

    @property
    def name(self) -> str:
        return self.package_info.name

    @property
    def scope(self) -> Optional[str]:
        return self.import_spec.scope

    @property
    def local_name(self) -> str:
        return self.import_spec.local

    @property
    def version(self) -> str:
        return self.package_info.version

    def as_package(self) -> PackageResolution:
        return self

    def declared_dependencies(self) -> List[Tuple[DependencyKind, Mapping[str, str]]]:
        """Declared dependency maps in lookup order: runtime, installed peer, then dev ones."""
        if self._declared is None:
            info = self.package_info
            self._declared = [
                (DependencyKind.RUNTIME, info.dependencies("dependencies")),
                (DependencyKind.PEER, self._installed_peer_dependencies()),
                (DependencyKind.DEV, info.dependencies("devDependencies")),
            ]
        return self._declared

    def _installed_peer_dependencies(self) -> Mapping[str, str]:
        info = self.package_info
        peer_deps = info.dependencies("peerDependencies")
        dev_deps = info.dependencies("devDependencies")
        # Peer dependencies can only be resolved when installed as dev ones.
        return {name: peer_range for name, peer_range in peer_deps.items() if name in dev_deps}

    def resolve_dependency(
        self,
        on: ImportResolution,
        via: Optional[ImportResolution] = None,
    ) -> Optional[ImportDependency]:
        dependency = super().resolve_dependency(on, via=via)
        if dependency is not None:
            return dependency

        if on.as_sub_package() is None:
            return None

        kind = self._find_declared_kind(on.host, cached=via is None)
        if kind is not None:
            return ImportDependency(kind, on)
        if via is None:
            return None

        return self._resolve_transitive_dependency(on, via)

    def _find_declared_kind(self, target: PackageResolution, cached: bool) -> Optional[DependencyKind]:
        if cached and target.uri in self._dependencies:
            return self._dependencies[target.uri]

        found: Optional[DependencyKind] = None
        for kind, deps in self.declared_dependencies():
            npm_range = parse_range(deps.get(target.name))
            if npm_range is not None and satisfies(target.version, npm_range):
                found = kind
                break

        if cached:
            self._dependencies[target.uri] = found
        if is_debug_enabled(logger):
            logger.debug(
                "Dependency of %s on %s: %s",
                self.uri,
                target.uri,
                found.value if found else None,
                extra=extra_context(event="decision", component="classifier", action="find_declared",
                                    outcome="found" if found else "not_found"),
            )
        return found

    def _resolve_transitive_dependency(
        self,
        on: ImportResolution,
        via: ImportResolution,
    ) -> Optional[ImportDependency]:
        via_dependency = self.resolve_dependency(via)
        if via_dependency is None:
            return None

        via_host = via.host
        if via_host is None:
            return None
        if via_host.resolve_dependency(on) is None:
            return None

        if via_dependency.kind in DECLARED_KINDS:
            return ImportDependency(via_dependency.kind, on)
        if via_dependency.kind in AMBIENT_DEPENDENCY_KINDS:
            # Only custom hosted resolutions carry an ambient import spec.
            return via_dependency
        return None


def _package_import_spec(name: str) -> PackageImport:
    spec = recognize_import(name)
    if spec.kind is ImportKind.PACKAGE:
        return spec
    return PackageImport(spec=name, name=name, scope=None, local=name)
