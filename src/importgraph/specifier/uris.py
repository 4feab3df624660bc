"""URI helpers shared by resolution nodes and file systems."""

import re
from typing import List, Optional

from .models import URIImport
from .recognizer import URI_PATTERN

# RFC 3986, appendix B. Unmatched groups are undefined components.
_URI_REFERENCE = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$", re.DOTALL)


def uri_to_import(uri: str) -> URIImport:
    """Build URI import specifier for an absolute URI.

    Raises:
        ValueError: If the URI has no scheme.
    """
    match = URI_PATTERN.match(uri)
    if not match:
        raise ValueError(f"Not an absolute URI: {uri!r}")
    return URIImport(spec=uri, scheme=match.group(1), path=match.group(2))


def dir_uri(uri: str) -> str:
    """Strip query and fragment from URI and make sure it ends with slash."""
    href = re.match(r"^[^#?]*", uri).group(0)
    return href if href.endswith("/") else href + "/"


def compose_uri(reference: str, base: str) -> str:
    """Resolve URI reference against absolute base URI (RFC 3986, section 5.2).

    Unlike `urllib.parse.urljoin`, works for any scheme, including the ones
    with opaque paths like `package:name/path`.
    """
    r_scheme, r_authority, r_path, r_query, r_fragment = _URI_REFERENCE.match(reference).groups()

    if r_scheme is not None:
        return _recompose(r_scheme, r_authority, _remove_dot_segments(r_path), r_query, r_fragment)

    b_scheme, b_authority, b_path, b_query, _ = _URI_REFERENCE.match(base).groups()

    if r_authority is not None:
        authority, path, query = r_authority, _remove_dot_segments(r_path), r_query
    else:
        authority = b_authority
        if not r_path:
            path = b_path
            query = r_query if r_query is not None else b_query
        else:
            if r_path.startswith("/"):
                path = _remove_dot_segments(r_path)
            else:
                path = _remove_dot_segments(_merge_paths(b_authority, b_path, r_path))
            query = r_query

    return _recompose(b_scheme, authority, path, query, r_fragment)


def _recompose(
    scheme: Optional[str],
    authority: Optional[str],
    path: str,
    query: Optional[str],
    fragment: Optional[str],
) -> str:
    result = f"{scheme}:" if scheme is not None else ""
    if authority is not None:
        result += "//" + authority
    result += path
    if query is not None:
        result += "?" + query
    if fragment is not None:
        result += "#" + fragment
    return result


def _merge_paths(base_authority: Optional[str], base_path: str, ref_path: str) -> str:
    if base_authority is not None and not base_path:
        return "/" + ref_path
    return base_path[:base_path.rfind("/") + 1] + ref_path


def _remove_dot_segments(path: str) -> str:
    if not path:
        return path
    absolute = path.startswith("/")
    segments = path.split("/")
    if absolute:
        segments = segments[1:]
    output: List[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == ".":
            if last:
                output.append("")
        elif segment == "..":
            if output:
                output.pop()
            if last:
                output.append("")
        else:
            output.append(segment)
    result = "/".join(output)
    return "/" + result if absolute else result


def trim_trailing_slash(uri: str) -> str:
    """Remove trailing slash from URI path, unless the path is the root one."""
    scheme, authority, path, query, fragment = _URI_REFERENCE.match(uri).groups()
    if len(path) > 1 and path.endswith("/"):
        return _recompose(scheme, authority, path[:-1], query, fragment)
    return uri
