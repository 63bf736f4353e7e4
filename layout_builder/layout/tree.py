"""
Mise à jour adressée de l'arbre sans mutation en place.

Chaque helper reconstruit uniquement le chemin touché (section → row →
colonne) et partage le reste de l'arbre tel quel.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from ..core.schemas import Column, Row, Section
from .queries import index_of
from .results import Address, MutationResult, NotFound, Ok

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def not_found(sections: List[Section], address: Address) -> NotFound:
    log.debug("adresse introuvable : %s", address)
    return NotFound(address=address, sections=sections)


def update_section(
    sections: List[Section],
    address: Address,
    fn: Callable[[Section], Optional[Section]],
) -> MutationResult:
    """Applique `fn` à la section ; `fn` retourne None si la cible interne est absente."""
    i = index_of(sections, address.section_id)
    if i < 0:
        return not_found(sections, address)
    new_section = fn(sections[i])
    if new_section is None:
        return not_found(sections, address)
    updated = list(sections)
    updated[i] = new_section
    return Ok(sections=updated)


def update_row(
    sections: List[Section],
    address: Address,
    fn: Callable[[Row], Optional[Row]],
) -> MutationResult:
    def on_section(section: Section) -> Optional[Section]:
        j = index_of(section.rows, address.row_id)
        if j < 0:
            return None
        new_row = fn(section.rows[j])
        if new_row is None:
            return None
        rows = list(section.rows)
        rows[j] = new_row
        return section.model_copy(update={"rows": rows})

    return update_section(sections, address, on_section)


def update_column(
    sections: List[Section],
    address: Address,
    fn: Callable[[Column], Optional[Column]],
) -> MutationResult:
    def on_row(row: Row) -> Optional[Row]:
        k = index_of(row.columns, address.column_id)
        if k < 0:
            return None
        new_column = fn(row.columns[k])
        if new_column is None:
            return None
        columns = list(row.columns)
        columns[k] = new_column
        return row.model_copy(update={"columns": columns})

    return update_row(sections, address, on_row)


def merge_record(
    model_cls: Type[M],
    current: Optional[BaseModel],
    patch: Union[BaseModel, Dict[str, Any]],
) -> M:
    """
    Fusion superficielle d'un enregistrement (style, styling).
    Clés snake_case ou camelCase acceptées, clés inconnues conservées,
    une valeur None retire la clé.
    """
    base = current.model_dump(by_alias=True, exclude_none=True) if current is not None else {}
    aliases = {name: (field.alias or name) for name, field in model_cls.model_fields.items()}
    data = patch.model_dump(by_alias=True, exclude_none=True) if isinstance(patch, BaseModel) else dict(patch)
    for key, value in data.items():
        key = aliases.get(key, key)
        if value is None:
            base.pop(key, None)
        else:
            base[key] = value
    return model_cls.model_validate(base)
