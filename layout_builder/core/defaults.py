"""
Valeurs par défaut : styles des nouveaux nœuds, presets de colonnes,
layout de départ d'une page neuve.
"""
from typing import List, Tuple

from .schemas import Column, NodeStyle, NodeStyling, Row, Section, SpacingBox


def _box(v: str, bottom: str = None) -> SpacingBox:
    return SpacingBox(top=v, right=v, bottom=bottom or v, left=v)


# ── Styles historiques des nœuds créés dans l'éditeur ──────────────────────

def default_section_style() -> NodeStyle:
    return NodeStyle(
        background_color="#ffffff",
        padding=_box("30px"),
        margin=_box("0px", bottom="20px"),
    )


def default_row_style() -> NodeStyle:
    return NodeStyle(
        background_color="transparent",
        padding=_box("20px"),
        margin=_box("0px"),
    )


def default_column_style() -> NodeStyle:
    return NodeStyle(background_color="transparent", padding=_box("10px"))


# ── Styles courants (styling) du layout de départ ───────────────────────────

def default_row_styling() -> NodeStyling:
    return NodeStyling(
        background_color="#ffffff",
        padding="0px",
        margin="0px",
        min_height="auto",
        border_color="#e0e0e0",
        border_width="0px",
        border_style="solid",
        border_radius="0px",
        box_shadow="none",
        opacity=1,
    )


def default_column_styling() -> NodeStyling:
    return NodeStyling(
        background_color="transparent",
        padding="0px",
        margin="0px",
        text_align="left",
        vertical_align="top",
        border_color="#e0e0e0",
        border_width="0px",
        border_style="solid",
        border_radius="0px",
        box_shadow="none",
        opacity=1,
    )


# ── Presets de colonnes ─────────────────────────────────────────────────────

LAYOUT_PRESETS: List[Tuple[str, List[float]]] = [
    ("1 Column",  [100]),
    ("2 Columns", [50, 50]),
    ("3 Columns", [33.33, 33.33, 33.33]),
    ("4 Columns", [25, 25, 25, 25]),
    ("2/3 + 1/3", [66.67, 33.33]),
    ("1/3 + 2/3", [33.33, 66.67]),
    ("1/4 + 3/4", [25, 75]),
    ("3/4 + 1/4", [75, 25]),
]

CUSTOM_LAYOUT = "Custom"


# ── Layout de départ ────────────────────────────────────────────────────────

def _starter_section(key: str, name: str, kind: str) -> Section:
    return Section(
        id=f"{key}-section",
        name=name,
        type=kind,
        styling=default_row_styling(),
        rows=[Row(
            id=f"{key}-row-1",
            styling=default_row_styling(),
            columns=[Column(
                id=f"{key}-col-1",
                width=100,
                styling=default_column_styling(),
            )],
        )],
    )


def starter_layout() -> List[Section]:
    """Layout d'une page neuve : une section d'en-tête + une section de contenu."""
    return [
        _starter_section("header",  "Header Section",  "header"),
        _starter_section("content", "Content Section", "content"),
    ]
