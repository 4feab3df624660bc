"""Resolution of absolute URI imports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from ..specifier.models import Import, ImportKind, URIImport
from ..specifier.uris import compose_uri, uri_to_import
from .base import ImportResolution

if TYPE_CHECKING:
    from .graph import ResolutionGraph


class URIResolution(ImportResolution):
    """Module addressed by URI outside of any package."""

    def __init__(self, graph: ResolutionGraph, import_spec: URIImport):
        super().__init__(graph, import_spec.spec, import_spec)

    async def resolve_import(self, spec: Union[Import, str]) -> ImportResolution:
        spec = self._graph.recognize_import(spec)
        if spec.kind is ImportKind.URI:
            return await self._resolve_uri_import(spec.spec)
        if spec.kind is ImportKind.PATH:
            return await self._resolve_uri_import(spec.uri)
        return await self._graph.resolve(spec)

    async def _resolve_uri_import(self, path: str) -> ImportResolution:
        return await self._graph.resolve_uri(uri_to_import(compose_uri(path, self.uri)))
