"""Package file system contract.

The file system deals with URIs rather than with OS-dependent paths. The
import graph only consumes it; implementations supply the actual I/O.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from ..common.logging_utils import extra_context, is_debug_enabled
from ..package.info import PackageInfo
from ..specifier.models import Import, SubPackageImport, URIImport
from ..specifier.recognizer import recognize_import
from ..specifier.uris import compose_uri, trim_trailing_slash

if TYPE_CHECKING:
    from ..resolution.base import ImportResolution
    from ..resolution.package import PackageResolution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageDir:
    """Directory containing a valid `package.json` file."""
    uri: str
    package_info: PackageInfo


class PackageFS(ABC):
    """Virtual file system to work with packages."""

    @property
    @abstractmethod
    def root(self) -> str:
        """URI of the root package."""

    def recognize_import(self, spec: Union[Import, str]) -> Import:
        """Recognize import specifier. May recognize platform-specific forms."""
        return recognize_import(spec)

    @abstractmethod
    def recognize_package_uri(self, import_spec: URIImport) -> Optional[str]:
        """Extract package URI from URI import, or None if it can not address packages."""

    @abstractmethod
    async def load_package(self, uri: str) -> Optional[PackageInfo]:
        """Load package info from directory.

        Returns:
            Package info, or None if the directory has no valid `package.json`.
        """

    @abstractmethod
    def parent_dir(self, uri: str) -> Optional[str]:
        """Find parent directory URI, or None at the file system root."""

    def resolve_path(self, relative_to: ImportResolution, path: str) -> str:
        """Resolve path or URI against resolution base of another module.

        A trailing slash introduced by the base is removed, unless the path
        itself ends with one.
        """
        resolved = compose_uri(path, relative_to.resolution_base_uri)
        if not path.endswith("/"):
            resolved = trim_trailing_slash(resolved)
        return resolved

    @abstractmethod
    async def resolve_name(self, relative_to: PackageResolution, name: str) -> Optional[str]:
        """Locate the module `name` would be imported from by the given package.

        The returned URI is not necessarily the package directory one.

        Returns:
            Module URI, or None if the name can not be resolved.
        """

    async def deref_entry(
        self,
        host: PackageResolution,
        import_spec: SubPackageImport,
    ) -> Optional[str]:
        """Find redirect target of resolved package, entry or private import.

        Returns:
            Import specifier to resolve against the host package, or None.
        """
        return None

    async def find_package_dir(self, uri: str) -> Optional[PackageDir]:
        """Search for the nearest directory containing valid package, starting from the given one."""
        current: Optional[str] = uri
        while current:
            package_info = await self.load_package(current)
            if package_info is not None:
                if is_debug_enabled(logger):
                    logger.debug(
                        "Package directory found",
                        extra=extra_context(event="lookup", component="fs", action="find_package_dir",
                                            outcome="found", uri=uri, package_uri=current),
                    )
                return PackageDir(uri=current, package_info=package_info)
            current = self.parent_dir(current)
        return None
