"""
layout_builder — éditeur de mise en page Section → Row → Column → Module.

Arbre immuable (pydantic), mutations pures, sérialisation JSON versionnée,
persistance via un PageStore (HTTP ou SQLite), rendu HTML.
"""
__version__ = "0.2.0"

from .core import Module, Column, Row, Section, Page, IdGenerator, starter_layout
from .errors import LayoutBuilderError, ParseError, PageValidationError, TransportError
from .layout import parse, parse_or_default, serialize
from .editor import PageBuilder, EditorStatus

__all__ = [
    "Module",
    "Column",
    "Row",
    "Section",
    "Page",
    "IdGenerator",
    "starter_layout",
    "LayoutBuilderError",
    "ParseError",
    "PageValidationError",
    "TransportError",
    "parse",
    "parse_or_default",
    "serialize",
    "PageBuilder",
    "EditorStatus",
]
