"""
Protocol Renderer — interface pluggable pour les renderers (HTML, JSON…).
"""
from typing import List, Optional, Protocol, runtime_checkable

from ..core.schemas import Module, Page, Section


@runtime_checkable
class Renderer(Protocol):
    def render_page(self, page: Page, sections: Optional[List[Section]] = None) -> str: ...
    def render_module(self, module: Module) -> str: ...
