"""Dependency classification models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import ImportResolution


class DependencyKind(Enum):
    """Kinds of dependency of one module on another."""
    SELF = "self"
    RUNTIME = "runtime"
    DEV = "dev"
    PEER = "peer"
    IMPLIED = "implied"
    SYNTHETIC = "synthetic"


# Dependencies declared in `package.json`.
DECLARED_KINDS = frozenset([DependencyKind.RUNTIME, DependencyKind.DEV, DependencyKind.PEER])

# Dependencies on modules that are not package-relative.
AMBIENT_DEPENDENCY_KINDS = frozenset([DependencyKind.IMPLIED, DependencyKind.SYNTHETIC])


@dataclass(frozen=True)
class ImportDependency:
    """Dependency of a module on another one."""
    kind: DependencyKind
    on: ImportResolution
