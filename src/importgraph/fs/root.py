"""Root package resolution."""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..errors import PackageNotFoundError
from ..resolution.graph import ResolutionGraph
from ..resolution.package import PackageResolution
from .base import PackageFS
from .node import NodePackageFS

logger = logging.getLogger(__name__)


async def resolve_root_package(dir_or_fs: Optional[Union[str, PackageFS]] = None) -> PackageResolution:
    """Resolve root package and start new resolution graph with it.

    Args:
        dir_or_fs: Package file system, or root directory path or `file:` URI
            for a disk-backed one. Current working directory by default.

    Returns:
        Root package resolution.

    Raises:
        PackageNotFoundError: If there is no valid `package.json` at the root.
    """
    fs = dir_or_fs if isinstance(dir_or_fs, PackageFS) else NodePackageFS(dir_or_fs)

    package_info = await fs.load_package(fs.root)
    if package_info is None:
        raise PackageNotFoundError(fs.root)

    logger.debug("Root package %s@%s at %s", package_info.name, package_info.version, fs.root)
    graph = ResolutionGraph(fs, lambda graph: PackageResolution(graph, fs.root, package_info=package_info))
    return graph.root.as_package()
