"""Resolution of imports not bound to any URI or package."""

from __future__ import annotations

from typing import Union

from ..specifier.models import Import
from .base import ImportResolution


class GenericResolution(ImportResolution):
    """Ambient, unresolved or unknown import. Resolves everything through the graph."""

    async def resolve_import(self, spec: Union[Import, str]) -> ImportResolution:
        return await self._graph.resolve(self._graph.recognize_import(spec))
