"""Import specifier model and recognizer."""

from .models import (
    Import,
    ImportKind,
    PackageImport,
    EntryImport,
    ImpliedImport,
    URIImport,
    PathImport,
    PrivateImport,
    SyntheticImport,
    UnknownImport,
)
from .recognizer import recognize_import
from .uris import compose_uri, dir_uri, uri_to_import

__all__ = [
    "Import",
    "ImportKind",
    "PackageImport",
    "EntryImport",
    "ImpliedImport",
    "URIImport",
    "PathImport",
    "PrivateImport",
    "SyntheticImport",
    "UnknownImport",
    "recognize_import",
    "compose_uri",
    "dir_uri",
    "uri_to_import",
]
