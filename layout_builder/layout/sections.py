"""
Gestion des sections et des rows.

Transformations pures : chaque fonction reçoit la liste courante de sections
et retourne un nouvel arbre, aucun nœud n'est modifié en place. Les
opérations adressées retournent un MutationResult (Ok | NotFound).
"""
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from ..core.defaults import default_column_style, default_row_style, default_section_style
from ..core.ids import IdGenerator, id_stem
from ..core.schemas import Column, Module, NodeStyle, NodeStyling, Row, Section
from .queries import array_move, index_of
from .results import Address, MutationResult, Ok
from .tree import merge_record, not_found, update_column, update_row, update_section

Patch = Union[BaseModel, Dict[str, Any]]


# ── Constructeurs ───────────────────────────────────────────────────────────

def new_column(ids: IdGenerator, width: float = 100, prefix: str = "col") -> Column:
    return Column(id=ids.generate(prefix), width=width, style=default_column_style())


def new_row(ids: IdGenerator) -> Row:
    """Row par défaut : une colonne pleine largeur, vide."""
    return Row(id=ids.generate("row"), style=default_row_style(), columns=[new_column(ids)])


def new_section(ids: IdGenerator, name: str = "New Section", kind: str = "custom") -> Section:
    return Section(
        id=ids.generate("section"),
        name=name,
        type=kind,
        style=default_section_style(),
        rows=[new_row(ids)],
    )


# ── Copies profondes avec ids neufs ─────────────────────────────────────────

def clone_module(module: Module, ids: IdGenerator) -> Module:
    return module.model_copy(update={"id": ids.generate(id_stem(module.id))}, deep=True)


def clone_column(column: Column, ids: IdGenerator) -> Column:
    return column.model_copy(
        update={
            "id": ids.generate("col"),
            "modules": [clone_module(m, ids) for m in column.modules],
        },
        deep=True,
    )


def clone_row(row: Row, ids: IdGenerator) -> Row:
    return row.model_copy(
        update={
            "id": ids.generate("row"),
            "columns": [clone_column(c, ids) for c in row.columns],
        },
        deep=True,
    )


def clone_section(section: Section, ids: IdGenerator) -> Section:
    return section.model_copy(
        update={
            "id": ids.generate("section"),
            "name": f"{section.name} Copy",
            "rows": [clone_row(r, ids) for r in section.rows],
        },
        deep=True,
    )


# ── Sections ────────────────────────────────────────────────────────────────

def add_section(sections: List[Section], ids: IdGenerator,
                name: str = "New Section", kind: str = "custom") -> List[Section]:
    """Ajoute une section en fin de layout (une row, une colonne pleine largeur)."""
    return [*sections, new_section(ids, name=name, kind=kind)]


def duplicate_section(sections: List[Section], section_id: str, ids: IdGenerator) -> MutationResult:
    """Clone profond inséré juste après l'original ; tous les ids sont régénérés."""
    i = index_of(sections, section_id)
    if i < 0:
        return not_found(sections, Address(section_id=section_id))
    clone = clone_section(sections[i], ids)
    return Ok(sections=[*sections[:i + 1], clone, *sections[i + 1:]])


def delete_section(sections: List[Section], section_id: str) -> MutationResult:
    """Retire la section. Aucun remplacement : l'appelant garde au moins une section."""
    if index_of(sections, section_id) < 0:
        return not_found(sections, Address(section_id=section_id))
    return Ok(sections=[s for s in sections if s.id != section_id])


def can_delete_section(sections: Sequence[Section]) -> bool:
    return len(sections) > 1


def reorder_sections(sections: List[Section], from_index: int, to_index: int) -> MutationResult:
    try:
        return Ok(sections=array_move(sections, from_index, to_index))
    except IndexError:
        return not_found(sections, Address(section_id="*", index=from_index))


def rename_section(sections: List[Section], section_id: str, name: str) -> MutationResult:
    return update_section(
        sections, Address(section_id=section_id),
        lambda s: s.model_copy(update={"name": name}),
    )


def update_section_style(sections: List[Section], section_id: str, style: Patch) -> MutationResult:
    return update_section(
        sections, Address(section_id=section_id),
        lambda s: s.model_copy(update={"style": merge_record(NodeStyle, s.style, style)}),
    )


def update_section_styling(sections: List[Section], section_id: str, styling: Patch) -> MutationResult:
    return update_section(
        sections, Address(section_id=section_id),
        lambda s: s.model_copy(update={"styling": merge_record(NodeStyling, s.styling, styling)}),
    )


def update_section_rows(sections: List[Section], section_id: str, rows: List[Row]) -> MutationResult:
    return update_section(
        sections, Address(section_id=section_id),
        lambda s: s.model_copy(update={"rows": [r.model_copy(deep=True) for r in rows]}),
    )


# ── Rows ────────────────────────────────────────────────────────────────────

def add_row(sections: List[Section], section_id: str, ids: IdGenerator) -> MutationResult:
    return update_section(
        sections, Address(section_id=section_id),
        lambda s: s.model_copy(update={"rows": [*s.rows, new_row(ids)]}),
    )


def duplicate_row(sections: List[Section], section_id: str, row_id: str, ids: IdGenerator) -> MutationResult:
    """Copie insérée directement après la row source, ids neufs à tous les niveaux."""
    def on_section(section: Section):
        j = index_of(section.rows, row_id)
        if j < 0:
            return None
        rows = list(section.rows)
        rows.insert(j + 1, clone_row(section.rows[j], ids))
        return section.model_copy(update={"rows": rows})

    return update_section(sections, Address(section_id=section_id, row_id=row_id), on_section)


def delete_row(sections: List[Section], section_id: str, row_id: str) -> MutationResult:
    def on_section(section: Section):
        if index_of(section.rows, row_id) < 0:
            return None
        return section.model_copy(update={"rows": [r for r in section.rows if r.id != row_id]})

    return update_section(sections, Address(section_id=section_id, row_id=row_id), on_section)


def reorder_rows(sections: List[Section], section_id: str, from_index: int, to_index: int) -> MutationResult:
    def on_section(section: Section):
        try:
            return section.model_copy(update={"rows": array_move(section.rows, from_index, to_index)})
        except IndexError:
            return None

    return update_section(sections, Address(section_id=section_id, index=from_index), on_section)


def change_row_layout(sections: List[Section], section_id: str, row_id: str,
                      widths: Sequence[float], ids: IdGenerator) -> MutationResult:
    """
    Remplace les colonnes de la row : une colonne par largeur.
    Les index conservés gardent id, styles et modules ; les nouveaux index
    reçoivent une colonne vide ; les colonnes en trop (et leurs modules) sont perdues.
    """
    widths = list(widths)
    if not widths:
        raise ValueError("change_row_layout : au moins une largeur est requise")
    if any(w <= 0 for w in widths):
        raise ValueError(f"change_row_layout : largeurs invalides {widths}")

    def on_row(row: Row) -> Row:
        columns = []
        for index, width in enumerate(widths):
            if index < len(row.columns):
                columns.append(row.columns[index].model_copy(update={"width": width}))
            else:
                columns.append(new_column(ids, width=width, prefix=f"col-{index}"))
        return row.model_copy(update={"columns": columns})

    return update_row(sections, Address(section_id=section_id, row_id=row_id), on_row)


def update_column_widths(sections: List[Section], section_id: str, row_id: str,
                         widths: Sequence[Optional[float]]) -> MutationResult:
    """
    Redimensionne les colonnes existantes sans toucher à leur nombre.
    La colonne i prend widths[i] ; une largeur absente (liste trop courte ou None)
    laisse la largeur courante. Les largeurs en trop sont ignorées.
    """
    widths = list(widths)
    if any(w is not None and w <= 0 for w in widths):
        raise ValueError(f"update_column_widths : largeurs invalides {widths}")

    def on_row(row: Row) -> Row:
        columns = []
        for index, column in enumerate(row.columns):
            width = widths[index] if index < len(widths) else None
            columns.append(column if width is None else column.model_copy(update={"width": width}))
        return row.model_copy(update={"columns": columns})

    return update_row(sections, Address(section_id=section_id, row_id=row_id), on_row)


def update_row_settings(sections: List[Section], section_id: str, row_id: str,
                        settings: Dict[str, Any]) -> MutationResult:
    """Fusion superficielle dans le sac `settings` (clés opaques, non validées, None retire la clé)."""
    def on_row(row: Row) -> Row:
        merged = {**(row.settings or {}), **settings}
        merged = {k: v for k, v in merged.items() if v is not None}
        return row.model_copy(update={"settings": merged})

    return update_row(sections, Address(section_id=section_id, row_id=row_id), on_row)


def update_row_style(sections: List[Section], section_id: str, row_id: str, style: Patch) -> MutationResult:
    return update_row(
        sections, Address(section_id=section_id, row_id=row_id),
        lambda r: r.model_copy(update={"style": merge_record(NodeStyle, r.style, style)}),
    )


def update_row_styling(sections: List[Section], section_id: str, row_id: str, styling: Patch) -> MutationResult:
    return update_row(
        sections, Address(section_id=section_id, row_id=row_id),
        lambda r: r.model_copy(update={"styling": merge_record(NodeStyling, r.styling, styling)}),
    )


# ── Colonnes ────────────────────────────────────────────────────────────────

def update_column_style(sections: List[Section], section_id: str, row_id: str,
                        column_id: str, style: Patch) -> MutationResult:
    return update_column(
        sections, Address(section_id=section_id, row_id=row_id, column_id=column_id),
        lambda c: c.model_copy(update={"style": merge_record(NodeStyle, c.style, style)}),
    )


def update_column_styling(sections: List[Section], section_id: str, row_id: str,
                          column_id: str, styling: Patch) -> MutationResult:
    return update_column(
        sections, Address(section_id=section_id, row_id=row_id, column_id=column_id),
        lambda c: c.model_copy(update={"styling": merge_record(NodeStyling, c.styling, styling)}),
    )
