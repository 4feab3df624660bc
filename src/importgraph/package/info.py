"""Information collected for a package from its `package.json`."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..constants import Constants
from .entry_point import EntryTarget, PackageEntryPoint, PackageEntryTargets

logger = logging.getLogger(__name__)


@dataclass
class _EntryIndex:
    by_path: Dict[str, PackageEntryPoint] = field(default_factory=dict)
    patterns: List[PackageEntryPoint] = field(default_factory=list)

    def find(self, path: str) -> Optional[PackageEntryTargets]:
        entry_point = self.by_path.get(path)
        if entry_point is not None:
            return entry_point
        for pattern in self.patterns:
            match = pattern.find_targets(path)
            if match is not None:
                return match
        return None


class PackageInfo:
    """Package metadata: name, version, module type, dependencies and entry points.

    Entry points are indexed on first access, from the `exports` field or,
    when it is absent, from `main` plus an implicit `./*` export.
    """

    @classmethod
    def from_json(cls, package_json: Union[Mapping[str, Any], PackageInfo]) -> PackageInfo:
        """Construct package info from `package.json` contents, unless constructed already."""
        if isinstance(package_json, PackageInfo):
            return package_json
        return cls(package_json)

    @classmethod
    def load(cls, path: str = Constants.PACKAGE_JSON_FILE) -> PackageInfo:
        """Load package info from `package.json` file.

        Raises:
            OSError: If the file can not be read.
            ValueError: If the file is not valid JSON.
        """
        with open(path, "r", encoding="utf-8") as fh:
            return cls(json.load(fh))

    def __init__(self, package_json: Mapping[str, Any]):
        self._package_json: Dict[str, Any] = {
            **package_json,
            "name": package_json.get("name") or Constants.DEFAULT_PACKAGE_NAME,
            "version": package_json.get("version") or Constants.DEFAULT_PACKAGE_VERSION,
        }
        self._name_parts: Optional[Tuple[str, Optional[str]]] = None
        self._entry_points: Optional[_EntryIndex] = None
        self._private_entries: Optional[_EntryIndex] = None
        self._main_entry_point: Optional[PackageEntryPoint] = None

    @property
    def package_json(self) -> Mapping[str, Any]:
        """Raw `package.json` contents with name and version defaults applied."""
        return self._package_json

    @property
    def name(self) -> str:
        """Full package name. `-` when missing."""
        return self._package_json["name"]

    @property
    def version(self) -> str:
        """Package version. `0.0.0` when missing."""
        return self._package_json["version"]

    @property
    def scope(self) -> Optional[str]:
        """Package scope including `@` prefix, if any."""
        return self._get_name_parts()[1]

    @property
    def local_name(self) -> str:
        """Name within package scope, or the full name of unscoped package."""
        return self._get_name_parts()[0]

    @property
    def type(self) -> str:
        """`module` only when explicitly declared so, `commonjs` otherwise."""
        return "module" if self._package_json.get("type") == "module" else "commonjs"

    def _get_name_parts(self) -> Tuple[str, Optional[str]]:
        if self._name_parts is None:
            name = self.name
            scope_end = name.find("/", 1) if name.startswith("@") else -1
            if scope_end < 0:
                # Unscoped, or invalid scoped name.
                self._name_parts = (name, None)
            else:
                self._name_parts = (name[scope_end + 1:], name[:scope_end])
        return self._name_parts

    @property
    def main_entry_point(self) -> Optional[PackageEntryPoint]:
        """Entry point exported as `.`, if any."""
        if self._main_entry_point is None:
            found = self.find_entry_point(".")
            if found is not None:
                self._main_entry_point = found.entry_point
        return self._main_entry_point

    def find_entry_point(self, path: str) -> Optional[PackageEntryTargets]:
        """Search for entry point exporting the given path.

        Exact path wins. Otherwise, the first pattern declared matching the path.

        Args:
            path: Export path, `.` or starting with `./`.

        Returns:
            Found targets, or None.
        """
        return self._get_entry_points().find(path)

    def entry_points(self) -> Iterator[Tuple[str, PackageEntryPoint]]:
        """Iterate over (path, entry point) pairs in declaration order."""
        return iter(list(self._get_entry_points().by_path.items()))

    def find_import(self, spec: str) -> Optional[PackageEntryTargets]:
        """Search for private subpath import declared in `imports` field.

        Args:
            spec: Private import specifier starting with `#`.

        Returns:
            Found targets, or None.
        """
        if self._private_entries is None:
            self._private_entries = self._build_index(self._list_import_items())
        return self._private_entries.find(spec)

    def dependencies(self, field_name: str) -> Mapping[str, str]:
        """Dependency map declared under the given `package.json` field."""
        deps = self._package_json.get(field_name)
        return deps if isinstance(deps, Mapping) else {}

    def _get_entry_points(self) -> _EntryIndex:
        if self._entry_points is None:
            self._entry_points = self._build_index(self._list_entry_items())
        return self._entry_points

    def _build_index(self, items: Iterator[Tuple[str, EntryTarget]]) -> _EntryIndex:
        grouped: Dict[str, List[EntryTarget]] = {}
        for path, target in items:
            grouped.setdefault(path, []).append(target)

        index = _EntryIndex()
        for path, targets in grouped.items():
            entry_point = PackageEntryPoint(self, path, targets)
            index.by_path[path] = entry_point
            if entry_point.is_pattern():
                index.patterns.append(entry_point)
        return index

    def _list_entry_items(self) -> Iterator[Tuple[str, EntryTarget]]:
        exports = self._package_json.get("exports")
        if exports:
            # `main` is ignored when `exports` present.
            yield from self._cond_exports((), exports)
            return

        main = self._package_json.get("main")
        if isinstance(main, str) and main:
            yield ".", EntryTarget((), main if main.startswith("./") else "./" + main)

        # Everything is exported when there is no export map.
        yield "./*", EntryTarget((), "./*")

    def _list_import_items(self) -> Iterator[Tuple[str, EntryTarget]]:
        imports = self._package_json.get("imports")
        if not isinstance(imports, Mapping):
            return
        for key, entry in imports.items():
            if key.startswith("#"):
                yield from self._path_exports(key, (), entry)

    def _cond_exports(self, conditions: Tuple[str, ...], exports: Any) -> Iterator[Tuple[str, EntryTarget]]:
        if isinstance(exports, str):
            yield ".", EntryTarget(conditions, exports)
        elif isinstance(exports, Mapping):
            for key, entry in exports.items():
                if key.startswith("."):
                    yield from self._path_exports(key, conditions, entry)
                else:
                    yield from self._cond_exports(conditions + (key,), entry)
        elif isinstance(exports, list):
            for entry in exports:
                yield from self._cond_exports(conditions, entry)
        elif exports is not None:
            logger.debug("Ignoring malformed exports of %s: %r", self.name, exports)

    def _path_exports(
        self,
        path: str,
        conditions: Tuple[str, ...],
        exports: Any,
    ) -> Iterator[Tuple[str, EntryTarget]]:
        if isinstance(exports, str):
            yield path, EntryTarget(conditions, exports)
        elif isinstance(exports, Mapping):
            for key, entry in exports.items():
                yield from self._path_exports(path, conditions + (key,), entry)
        elif isinstance(exports, list):
            for entry in exports:
                yield from self._path_exports(path, conditions, entry)
        elif exports is not None:
            logger.debug("Ignoring malformed export %r of %s: %r", path, self.name, exports)

    def __repr__(self) -> str:
        return f"PackageInfo({self.name!r}, {self.version!r})"
