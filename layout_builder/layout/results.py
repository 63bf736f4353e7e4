"""
Résultat des mutations adressées (section / row / colonne / index).

Ok(sections)               → nouvel arbre
NotFound(address, sections) → adresse introuvable, arbre inchangé

Les deux variantes portent `.sections` : un appelant qui ignore le tag
obtient le comportement historique (no-op silencieux).
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from ..core.schemas import Section


class Address(BaseModel):
    """Adresse d'un nœud dans l'arbre."""
    section_id: str
    row_id:     Optional[str] = None
    column_id:  Optional[str] = None
    index:      Optional[int] = None

    def __str__(self) -> str:
        parts = [self.section_id, self.row_id, self.column_id]
        path  = "/".join(p for p in parts if p)
        return f"{path}[{self.index}]" if self.index is not None else path


class Ok(BaseModel):
    ok:       Literal[True] = True
    sections: List[Section]


class NotFound(BaseModel):
    ok:       Literal[False] = False
    address:  Address
    sections: List[Section]


MutationResult = Union[Ok, NotFound]
