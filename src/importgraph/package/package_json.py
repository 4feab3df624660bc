"""Helpers for raw `package.json` contents."""

import logging
from typing import Any, Mapping, Optional

import semantic_version

logger = logging.getLogger(__name__)


def is_valid_package_json(package_json: Any) -> bool:
    """Check whether `package.json` contents are valid.

    Valid contents have a non-empty name and a semver-valid version.
    """
    if not isinstance(package_json, Mapping):
        return False
    name = package_json.get("name")
    version = package_json.get("version")
    if not isinstance(name, str) or not name:
        return False
    return isinstance(version, str) and semantic_version.validate(version)


def parse_range(spec: Optional[str]) -> Optional[semantic_version.NpmSpec]:
    """Parse npm version range.

    Returns:
        Parsed range, or None if the range is missing or malformed.
    """
    if not isinstance(spec, str):
        return None
    try:
        # Empty range matches any version.
        return semantic_version.NpmSpec(spec.strip() or "*")
    except ValueError:
        logger.debug("Ignoring invalid version range %r", spec)
        return None


def satisfies(version: str, npm_range: semantic_version.NpmSpec) -> bool:
    """Test whether version satisfies parsed npm range. Invalid versions never do."""
    try:
        return npm_range.match(semantic_version.Version(version))
    except ValueError:
        return False
