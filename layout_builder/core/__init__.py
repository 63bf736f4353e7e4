"""Core — schémas, ids, styles, valeurs par défaut."""
from .schemas import (
    SpacingBox,
    NodeStyle,
    NodeStyling,
    Module,
    Column,
    Row,
    Section,
    Page,
)
from .ids import IdGenerator, id_stem
from .styling import to_render_properties, normalize_node_style, to_inline_css, generate_style_css
from .defaults import LAYOUT_PRESETS, CUSTOM_LAYOUT, starter_layout

__all__ = [
    "SpacingBox",
    "NodeStyle",
    "NodeStyling",
    "Module",
    "Column",
    "Row",
    "Section",
    "Page",
    "IdGenerator",
    "id_stem",
    "to_render_properties",
    "normalize_node_style",
    "to_inline_css",
    "generate_style_css",
    "LAYOUT_PRESETS",
    "CUSTOM_LAYOUT",
    "starter_layout",
]
