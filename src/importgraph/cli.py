"""importgraph command-line entry point."""

import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from .args import parse_args
from .common.logging_utils import configure_logging, extra_context, is_debug_enabled
from .config import resolve_settings
from .constants import Constants, ExitCodes
from .errors import ConfigError, PackageNotFoundError
from .fs.root import resolve_root_package
from .resolution.base import ImportResolution
from .resolution.package import PackageResolution

logger = logging.getLogger(__name__)


async def resolve_specs(
    root_dir: Optional[str],
    specs: Sequence[str],
    from_spec: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Resolve import specifiers and describe the results.

    Args:
        root_dir: Root package directory. Current directory when omitted.
        specs: Import specifiers to resolve.
        from_spec: Specifier of the importing module. The root package by default.

    Returns:
        Description of each resolved specifier, in the order given.
    """
    root = await resolve_root_package(root_dir)
    origin: ImportResolution = root
    if from_spec:
        origin = await root.resolve_import(from_spec)

    return list(await asyncio.gather(*(_describe(root, origin, spec) for spec in specs)))


async def _describe(root: PackageResolution, origin: ImportResolution, spec: str) -> Dict[str, Any]:
    resolution = await origin.resolve_import(spec)
    target = await resolution.deref()
    dependency = root.resolve_dependency(resolution, via=None if origin is root else origin)
    host = resolution.host

    return {
        "spec": spec,
        "kind": root.graph.recognize_import(spec).kind.value,
        "uri": resolution.uri,
        "host": {"name": host.name, "version": host.version, "uri": host.uri} if host is not None else None,
        "deref": target.uri,
        "dependency": dependency.kind.value if dependency is not None else None,
    }


async def list_entries(root_dir: Optional[str], conditions: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """List entry points of the root package with targets selected by conditions."""
    root = await resolve_root_package(root_dir)
    info = root.package_info

    return [
        {
            "path": path,
            "pattern": entry_point.is_pattern(),
            "target": entry_point.find_conditional(*conditions),
            "js": entry_point.find_js(info.type, *conditions),
        }
        for path, entry_point in info.entry_points()
    ]


def export_json(data: Any, path: str) -> None:
    """Exports the results to a JSON file.

    Args:
        data: Results to export.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    args = parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        configure_logging(quiet=args.QUIET)
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    # Effective log level is passed to centralized logger via env.
    os.environ[Constants.ENV_LOG_LEVEL] = settings.loglevel
    configure_logging(log_file=args.LOG_FILE, quiet=args.QUIET)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main", target=args.command),
        )

    try:
        if args.command == "resolve":
            data: Any = asyncio.run(resolve_specs(settings.root, args.SPECS, args.FROM))
        else:
            data = asyncio.run(list_entries(settings.root, settings.conditions))
    except PackageNotFoundError as e:
        logger.error("%s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    logger.info("Processed %d item(s).", len(data))

    if args.OUTPUT:
        export_json(data, args.OUTPUT)
    if not args.QUIET:
        print(json.dumps(data, ensure_ascii=False, indent=2))

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
