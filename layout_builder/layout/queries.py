"""Lecture de l'arbre — recherche, comptages, presets de colonnes."""
from typing import Iterator, List, Optional, Sequence, TypeVar

from ..core.defaults import CUSTOM_LAYOUT, LAYOUT_PRESETS
from ..core.schemas import Column, Module, Row, Section

T = TypeVar("T")


# ── Recherche ───────────────────────────────────────────────────────────────

def index_of(items: Sequence, node_id: str) -> int:
    """Position d'un nœud par id, -1 si absent."""
    for i, item in enumerate(items):
        if item.id == node_id:
            return i
    return -1


def find_section(sections: List[Section], section_id: str) -> Optional[Section]:
    i = index_of(sections, section_id)
    return sections[i] if i >= 0 else None


def find_row(sections: List[Section], section_id: str, row_id: str) -> Optional[Row]:
    section = find_section(sections, section_id)
    if section is None:
        return None
    i = index_of(section.rows, row_id)
    return section.rows[i] if i >= 0 else None


def find_column(sections: List[Section], section_id: str, row_id: str, column_id: str) -> Optional[Column]:
    row = find_row(sections, section_id, row_id)
    if row is None:
        return None
    i = index_of(row.columns, column_id)
    return row.columns[i] if i >= 0 else None


def find_module(sections: List[Section], section_id: str, row_id: str,
                column_id: str, module_id: str) -> Optional[Module]:
    column = find_column(sections, section_id, row_id, column_id)
    if column is None:
        return None
    i = index_of(column.modules, module_id)
    return column.modules[i] if i >= 0 else None


def module_index(sections: List[Section], section_id: str, row_id: str,
                 column_id: str, module_id: str) -> int:
    column = find_column(sections, section_id, row_id, column_id)
    return index_of(column.modules, module_id) if column else -1


def iter_ids(sections: List[Section]) -> Iterator[str]:
    """Tous les ids de l'arbre, en profondeur."""
    for section in sections:
        yield section.id
        for row in section.rows:
            yield row.id
            for column in row.columns:
                yield column.id
                for module in column.modules:
                    yield module.id


# ── Déplacement ─────────────────────────────────────────────────────────────

def array_move(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """
    Retire l'élément en `from_index` et le réinsère en `to_index`.
    Retourne une nouvelle liste ; IndexError si un index est hors bornes.
    """
    n = len(items)
    if not (0 <= from_index < n and 0 <= to_index < n):
        raise IndexError(f"move {from_index} → {to_index} hors bornes (taille {n})")
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


# ── Calculs ─────────────────────────────────────────────────────────────────

def row_total_width(row: Row) -> float:
    return sum(col.width for col in row.columns)


def normalize_column_widths(row: Row) -> Row:
    """Ramène la somme des largeurs à 100, proportionnellement."""
    total = row_total_width(row)
    if total == 0:
        return row
    columns = [col.model_copy(update={"width": col.width / total * 100}) for col in row.columns]
    return row.model_copy(update={"columns": columns})


def count_modules_in_row(row: Row) -> int:
    return sum(len(col.modules) for col in row.columns)


def count_modules_in_section(section: Section) -> int:
    return sum(count_modules_in_row(row) for row in section.rows)


def is_section_empty(section: Section) -> bool:
    return all(count_modules_in_row(row) == 0 for row in section.rows)


def layout_name(widths: Sequence[float]) -> str:
    """Nom du preset correspondant aux largeurs (tolérance ±1), sinon "Custom"."""
    current = [round(w) for w in widths]
    for name, preset in LAYOUT_PRESETS:
        if len(preset) == len(current) and all(
            abs(round(w) - c) <= 1 for w, c in zip(preset, current)
        ):
            return name
    return CUSTOM_LAYOUT


def row_layout_name(row: Row) -> str:
    return layout_name([col.width for col in row.columns])
