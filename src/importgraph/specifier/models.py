"""Data models for recognized import specifiers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ImportKind(Enum):
    """Kinds of import specifiers."""
    PACKAGE = "package"
    ENTRY = "entry"
    IMPLIED = "implied"
    URI = "uri"
    PATH = "path"
    PRIVATE = "private"
    SYNTHETIC = "synthetic"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PackageImport:
    """Package import, scoped (`@scope/name`) or not, without subpath."""
    spec: str
    name: str
    scope: Optional[str]
    local: str
    subpath: None = None
    kind: ImportKind = ImportKind.PACKAGE


@dataclass(frozen=True)
class EntryImport:
    """Package entry point or file import. Subpath always starts with `/`."""
    spec: str
    name: str
    scope: Optional[str]
    local: str
    subpath: str
    kind: ImportKind = ImportKind.ENTRY


@dataclass(frozen=True)
class ImpliedImport:
    """Module implied by execution environment, e.g. a Node.js builtin."""
    spec: str
    from_: str
    kind: ImportKind = ImportKind.IMPLIED


@dataclass(frozen=True)
class URIImport:
    """Absolute URI import."""
    spec: str
    scheme: str
    path: str
    kind: ImportKind = ImportKind.URI


@dataclass(frozen=True)
class PathImport:
    """Absolute or relative path import.

    `path` is URI-encoded and uses `/` separators. Relative paths always start
    with `.`, absolute ones with `/`. `uri` equals `path` unless the absolute
    path needs a `file://` scheme to be addressable.
    """
    spec: str
    is_relative: bool
    path: str
    uri: str
    kind: ImportKind = ImportKind.PATH


@dataclass(frozen=True)
class PrivateImport:
    """Private subpath import. Always starts with `#`."""
    spec: str
    kind: ImportKind = ImportKind.PRIVATE


@dataclass(frozen=True)
class SyntheticImport:
    """Virtual module id starting with NUL."""
    spec: str
    kind: ImportKind = ImportKind.SYNTHETIC


@dataclass(frozen=True)
class UnknownImport:
    """Anything not recognized as another kind of import."""
    spec: str
    kind: ImportKind = ImportKind.UNKNOWN


Import = Union[
    PackageImport,
    EntryImport,
    ImpliedImport,
    URIImport,
    PathImport,
    PrivateImport,
    SyntheticImport,
    UnknownImport,
]

# Imports resolved relative to a host package.
SubPackageImport = Union[PackageImport, EntryImport, PathImport, PrivateImport]

AMBIENT_KINDS = frozenset([ImportKind.IMPLIED, ImportKind.SYNTHETIC])
