"""Import specifier recognition.

Parses raw import specifiers the way a Node.js-compatible loader would see
them, without touching the file system.
"""

import re
from typing import Callable, Dict, Optional, Union
from urllib.parse import quote

from ..constants import Constants
from .models import (
    EntryImport,
    ImpliedImport,
    Import,
    PackageImport,
    PathImport,
    PrivateImport,
    SyntheticImport,
    UnknownImport,
    URIImport,
)

URI_PATTERN = re.compile(r"^(?:([^:/?#]+):)(?://(?:[^/?#]*))?([^?#]*)(?:\?(?:[^#]*))?(?:#(?:.*))?")

# Characters allowed unescaped within a path segment (RFC 3986 pchar minus `%`).
_SEGMENT_SAFE = "!$&'()*+,;=:@"


def recognize_import(spec: Union[Import, str]) -> Import:
    """Recognize import specifier.

    Already recognized specifiers are returned unchanged. Never fails: anything
    not matching a known form is recognized as an unknown import.

    Args:
        spec: Raw import specifier or already recognized one.

    Returns:
        Recognized import specifier.
    """
    if not isinstance(spec, str):
        return spec
    if not spec:
        return UnknownImport(spec=spec)

    parser = _PREFIX_PARSERS.get(spec[0])
    if parser is not None:
        return parser(spec)

    return (
        _recognize_implied(spec)
        or _recognize_uri(spec)
        or _recognize_sub_package(spec)
    )


def _recognize_synthetic(spec: str) -> Import:
    return SyntheticImport(spec=spec)


def _recognize_private(spec: str) -> Import:
    return PrivateImport(spec=spec)


def _recognize_dot(spec: str) -> Import:
    relative = _recognize_relative(spec)
    if relative is not None:
        return relative
    # Unscoped package name can not start with dot.
    return UnknownImport(spec=spec)


def _recognize_relative(spec: str) -> Optional[PathImport]:
    if spec in (".", ".."):
        return PathImport(spec=spec, is_relative=True, path=spec, uri=spec)
    if spec.startswith(("./", "../", ".\\", "..\\")):
        path = encode_path(spec, backslashes=True)
        return PathImport(spec=spec, is_relative=True, path=path, uri=path)
    return None


def _recognize_absolute(spec: str) -> Import:
    path = encode_path(spec)
    return PathImport(spec=spec, is_relative=False, path=path, uri=path)


def _recognize_scoped(spec: str) -> Import:
    scope_end = spec.find("/", 1)
    if scope_end > 0 and spec[scope_end + 1:scope_end + 2] not in ("", "/"):
        return _recognize_sub_package(spec, spec[:scope_end], scope_end + 1)
    # Unscoped package name can not start with `@`.
    return UnknownImport(spec=spec)


def _recognize_reserved(spec: str) -> Import:
    # Unscoped package name can not start with underscore.
    return UnknownImport(spec=spec)


def _recognize_implied(spec: str) -> Optional[ImpliedImport]:
    prefix = Constants.NODE_SCHEME + ":"
    name = spec[len(prefix):] if spec.startswith(prefix) else spec
    if name in Constants.NODE_BUILTINS:
        return ImpliedImport(spec=spec, from_=Constants.IMPLIED_FROM_NODE)
    return None


def _recognize_uri(spec: str) -> Optional[URIImport]:
    match = URI_PATTERN.match(spec)
    if match:
        return URIImport(spec=spec, scheme=match.group(1), path=match.group(2))
    return None


def _recognize_sub_package(
    spec: str,
    scope: Optional[str] = None,
    local_offset: int = 0,
) -> Import:
    name_end = spec.find("/", local_offset)
    subpath: Optional[str] = None

    if name_end < 0:
        local = spec[local_offset:]
        name = spec
    else:
        local = spec[local_offset:name_end]
        name = spec[:name_end]
        subpath = spec[name_end:]
        if len(subpath) == 1:
            # Trailing slash refers the package itself.
            subpath = None
            spec = spec[:-1]

    if subpath:
        return EntryImport(spec=spec, name=name, scope=scope, local=local, subpath=subpath)
    return PackageImport(spec=spec, name=name, scope=scope, local=local)


def encode_path(path: str, backslashes: bool = False) -> str:
    """URI-encode path segments, keeping query and fragment as literal suffix.

    Args:
        path: File-system-like path.
        backslashes: Treat backslashes as path separators.

    Returns:
        Encoded path using `/` separators.
    """
    suffix_start = len(path)
    for delimiter in ("?", "#"):
        index = path.find(delimiter)
        if 0 <= index < suffix_start:
            suffix_start = index

    head, suffix = path[:suffix_start], path[suffix_start:]
    if backslashes:
        head = head.replace("\\", "/")

    return "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in head.split("/")) + suffix


_PREFIX_PARSERS: Dict[str, Callable[[str], Import]] = {
    Constants.SYNTHETIC_PREFIX: _recognize_synthetic,
    "#": _recognize_private,
    ".": _recognize_dot,
    "/": _recognize_absolute,
    "@": _recognize_scoped,
    "_": _recognize_reserved,
}
