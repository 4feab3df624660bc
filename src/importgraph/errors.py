"""Exceptions raised by the import graph."""


class ImportGraphError(Exception):
    """Base class for import graph failures."""


class PackageNotFoundError(ImportGraphError, LookupError):
    """Raised when a package node can not load its `package.json`."""

    def __init__(self, uri: str):
        super().__init__(f'No "package.json" file found at <{uri}>')
        self.uri = uri


class ConfigError(ImportGraphError, ValueError):
    """Raised when a configuration file can not be read or parsed."""
