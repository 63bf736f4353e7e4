from .base import Renderer
from .html import (
    HtmlRenderer,
    RenderContent,
    render_page,
    render_section,
    render_row,
    render_column,
    render_module,
    module_kind,
    page_css,
    active_speakers,
    tickets_with_editions,
    published_events,
)

__all__ = [
    "Renderer",
    "HtmlRenderer",
    "RenderContent",
    "render_page",
    "render_section",
    "render_row",
    "render_column",
    "render_module",
    "module_kind",
    "page_css",
    "active_speakers",
    "tickets_with_editions",
    "published_events",
]
