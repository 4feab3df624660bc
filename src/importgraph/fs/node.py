"""Disk-backed package file system following Node.js package layout."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

from ..constants import Constants
from ..package.entry_point import PackageEntryTargets
from ..package.info import PackageInfo
from ..package.package_json import is_valid_package_json
from ..specifier.models import ImportKind, SubPackageImport, URIImport
from ..specifier.uris import trim_trailing_slash
from .base import PackageFS

if TYPE_CHECKING:
    from ..resolution.package import PackageResolution

logger = logging.getLogger(__name__)


def uri_to_path(uri: str) -> Path:
    """Convert `file:` URI to local path."""
    return Path(url2pathname(urlsplit(uri).path))


class NodePackageFS(PackageFS):
    """Package file system working with `file:` URIs.

    Packages are directories containing valid `package.json` file. Package
    names are looked up in `node_modules` directories the way Node.js does.
    """

    def __init__(self, root: Optional[str] = None):
        if not root:
            self._root = Path(os.getcwd()).resolve().as_uri()
        elif root.startswith("file://"):
            self._root = trim_trailing_slash(root)
        else:
            self._root = Path(root).resolve().as_uri()

    @property
    def root(self) -> str:
        return self._root

    def recognize_package_uri(self, import_spec: URIImport) -> Optional[str]:
        return import_spec.spec if import_spec.scheme == "file" else None

    async def load_package(self, uri: str) -> Optional[PackageInfo]:
        package_json = await asyncio.to_thread(self._read_package_json, uri_to_path(uri))
        if package_json is None or not is_valid_package_json(package_json):
            return None
        return PackageInfo(package_json)

    @staticmethod
    def _read_package_json(directory: Path) -> Optional[Any]:
        file_path = directory / Constants.PACKAGE_JSON_FILE
        if not file_path.is_file():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", file_path, e)
            return None

    def parent_dir(self, uri: str) -> Optional[str]:
        path = uri_to_path(uri)
        parent = path.parent
        if parent == path:
            return None
        return parent.as_uri()

    async def resolve_name(self, relative_to: PackageResolution, name: str) -> Optional[str]:
        start = uri_to_path(relative_to.resolution_base_uri)
        found = await asyncio.to_thread(self._find_in_node_modules, start, name)
        if found is None:
            logger.debug("Package %s is not installed for %s", name, relative_to.uri)
            return None
        return found.as_uri()

    @staticmethod
    def _find_in_node_modules(start: Path, name: str) -> Optional[Path]:
        for directory in (start, *start.parents):
            if directory.name == Constants.NODE_MODULES_DIR:
                continue
            candidate = directory / Constants.NODE_MODULES_DIR / name
            if (candidate / Constants.PACKAGE_JSON_FILE).is_file():
                return candidate
        return None

    async def deref_entry(self, host: PackageResolution, import_spec: SubPackageImport) -> Optional[str]:
        info = host.package_info
        targets: Optional[PackageEntryTargets]

        if import_spec.kind is ImportKind.PACKAGE:
            targets = info.find_entry_point(".")
        elif import_spec.kind is ImportKind.ENTRY:
            targets = info.find_entry_point("." + import_spec.subpath)
        elif import_spec.kind is ImportKind.PRIVATE:
            targets = info.find_import(import_spec.spec)
        else:
            targets = None

        if targets is None:
            return None

        root = host.root.as_package()
        module_type = root.package_info.type if root is not None else info.type
        return targets.find_js(module_type)
