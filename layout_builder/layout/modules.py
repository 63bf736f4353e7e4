"""
Gestion des modules dans une colonne adressée (section, row, colonne).
"""
from typing import List, Union

from ..core.ids import IdGenerator, id_stem
from ..core.schemas import Column, Module, Section
from .queries import array_move, index_of
from .results import Address, MutationResult
from .tree import update_column

ModuleTemplate = Union[Module, dict]


def instantiate(template: ModuleTemplate, ids: IdGenerator) -> Module:
    """Copie profonde d'un gabarit du catalogue avec un id neuf ("speakers" → "speakers-1004")."""
    module = template if isinstance(template, Module) else Module.model_validate(template)
    return module.model_copy(update={"id": ids.generate(id_stem(module.id))}, deep=True)


def add_module(sections: List[Section], section_id: str, row_id: str, column_id: str,
               template: ModuleTemplate, ids: IdGenerator) -> MutationResult:
    """Ajoute une copie du gabarit en fin de colonne. NotFound si l'adresse est invalide."""
    address = Address(section_id=section_id, row_id=row_id, column_id=column_id)

    def on_column(column: Column) -> Column:
        return column.model_copy(update={"modules": [*column.modules, instantiate(template, ids)]})

    return update_column(sections, address, on_column)


def remove_module(sections: List[Section], section_id: str, row_id: str, column_id: str,
                  index: int) -> MutationResult:
    """Retire le module à la position donnée ; index hors bornes → NotFound, arbre inchangé."""
    address = Address(section_id=section_id, row_id=row_id, column_id=column_id, index=index)

    def on_column(column: Column):
        if not 0 <= index < len(column.modules):
            return None
        return column.model_copy(update={"modules": [m for i, m in enumerate(column.modules) if i != index]})

    return update_column(sections, address, on_column)


def remove_module_by_id(sections: List[Section], section_id: str, row_id: str, column_id: str,
                        module_id: str) -> MutationResult:
    address = Address(section_id=section_id, row_id=row_id, column_id=column_id)

    def on_column(column: Column):
        if index_of(column.modules, module_id) < 0:
            return None
        return column.model_copy(update={"modules": [m for m in column.modules if m.id != module_id]})

    return update_column(sections, address, on_column)


def reorder_modules(sections: List[Section], section_id: str, row_id: str, column_id: str,
                    from_index: int, to_index: int) -> MutationResult:
    """Déplacement ordonné dans une seule colonne ; les autres colonnes ne bougent pas."""
    address = Address(section_id=section_id, row_id=row_id, column_id=column_id, index=from_index)

    def on_column(column: Column):
        try:
            return column.model_copy(update={"modules": array_move(column.modules, from_index, to_index)})
        except IndexError:
            return None

    return update_column(sections, address, on_column)
