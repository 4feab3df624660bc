"""Package entry points: exported paths, subpath patterns and their conditional targets."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Pattern, Tuple

from ..constants import Constants

if TYPE_CHECKING:
    from .info import PackageInfo


@dataclass(frozen=True)
class EntryTarget:
    """Exported target, possibly conditional.

    Empty conditions stand for the `default` one.
    """
    conditions: Tuple[str, ...]
    target: str


class PackageEntryTargets(ABC):
    """Targets exported by a package entry."""

    @property
    @abstractmethod
    def entry_point(self) -> PackageEntryPoint:
        """Exporting entry point of the package."""

    @abstractmethod
    def find_conditional(self, *conditions: str) -> Optional[str]:
        """Search for the target matching all provided conditions.

        Args:
            conditions: Required export conditions. `default` when omitted.

        Returns:
            Matching target path, or None when not found.
        """

    def find_js(self, module_type: Optional[str], *conditions: str) -> Optional[str]:
        """Search for exported JavaScript file to import into another module.

        Tries `import` (for `module` consumers) or `require` (for anything else)
        together with extra conditions first, then extra conditions alone.

        Args:
            module_type: Consumer package type, `module` or `commonjs`.
            conditions: Additional export conditions.

        Returns:
            Matching target path, or None when not found.
        """
        js_condition = "import" if module_type == "module" else "require"
        found = self.find_conditional(js_condition, *conditions)
        if found is None:
            found = self.find_conditional(*conditions)
        return found


class PackageEntryPoint(PackageEntryTargets):
    """Exported path or subpath pattern with condition-specific targets."""

    def __init__(self, package_info: PackageInfo, path: str, targets: Iterable[EntryTarget]):
        self._package_info = package_info
        self._path = path
        self._pattern: Optional[Pattern[str]] = None
        # Dicts used as insertion-ordered sets.
        self._targets_by_condition: Dict[str, Dict[str, None]] = {}

        for item in targets:
            for condition in item.conditions or (Constants.DEFAULT_CONDITION,):
                self._targets_by_condition.setdefault(condition, {})[item.target] = None

    @property
    def package_info(self) -> PackageInfo:
        return self._package_info

    @property
    def entry_point(self) -> PackageEntryPoint:
        return self

    @property
    def path(self) -> str:
        """Exported path or pattern."""
        return self._path

    def is_pattern(self) -> bool:
        """Check whether this is a subpath pattern, i.e. its path contains `*`."""
        return "*" in self._path

    def find_targets(self, path: str) -> Optional[PackageEntryTargets]:
        """Search for targets exported by this entry point for the given path.

        Returns:
            This entry point for exact match, pattern match carrying the
            wildcard substitution, or None if the path is not exported.
        """
        if not self.is_pattern():
            return self if path == self._path else None

        if self._pattern is None:
            self._pattern = re.compile(
                "^" + re.escape(self._path).replace(r"\*", "(.*)") + "$",
                re.DOTALL,
            )
        match = self._pattern.match(path)
        if not match:
            return None
        return PackageEntryMatch(self, match.group(1))

    def find_conditional(self, *conditions: str) -> Optional[str]:
        """Search for the target registered under every requested condition.

        When several targets satisfy all conditions, the one declared first
        under the first requested condition is returned.
        """
        candidates: Optional[Dict[str, None]] = None

        for condition in conditions or (Constants.DEFAULT_CONDITION,):
            matching = self._targets_by_condition.get(condition)
            if not matching:
                return None
            if candidates is None:
                candidates = dict(matching)
            else:
                candidates = {target: None for target in candidates if target in matching}
                if not candidates:
                    return None

        return next(iter(candidates))

    def __repr__(self) -> str:
        return f"PackageEntryPoint({self._package_info.name!r}, {self._path!r})"


class PackageEntryMatch(PackageEntryTargets):
    """Projection of a subpath pattern against one concrete path."""

    def __init__(self, entry_point: PackageEntryPoint, substitution: str):
        self._entry_point = entry_point
        self._substitution = substitution

    @property
    def entry_point(self) -> PackageEntryPoint:
        return self._entry_point

    @property
    def substitution(self) -> str:
        """Text captured by the pattern wildcard."""
        return self._substitution

    def find_conditional(self, *conditions: str) -> Optional[str]:
        """Search for the target and substitute every `*` in it."""
        local_path = self._entry_point.find_conditional(*conditions)
        if local_path is None:
            return None
        return local_path.replace("*", self._substitution)
