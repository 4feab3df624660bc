"""Package metadata model and entry point matcher."""

from .entry_point import PackageEntryPoint, PackageEntryTargets
from .info import PackageInfo
from .package_json import is_valid_package_json, parse_range, satisfies

__all__ = [
    "PackageEntryPoint",
    "PackageEntryTargets",
    "PackageInfo",
    "is_valid_package_json",
    "parse_range",
    "satisfies",
]
