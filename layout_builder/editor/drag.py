"""
Drag & drop — réordonnancement dans une seule liste de frères.

Idle → Dragging(active_id) → Idle

compute_move() est pur ; DragController ne fait que suivre la session active.
Les dépôts hors cible, sur soi-même ou vers une autre liste sont des no-op.
"""
import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..layout.queries import array_move

log = logging.getLogger(__name__)

T = TypeVar("T")


def _default_key(item) -> str:
    return item if isinstance(item, str) else item.id


def move_indices(order: Sequence[T], active_id: str, over_id: Optional[str],
                 key: Callable[[T], str] = _default_key) -> Optional[Tuple[int, int]]:
    """(active_index, over_index) si le dépôt est valide, sinon None."""
    if over_id is None or active_id == over_id:
        return None
    ids = [key(item) for item in order]
    if active_id not in ids or over_id not in ids:
        return None
    return ids.index(active_id), ids.index(over_id)


def compute_move(order: Sequence[T], active_id: str, over_id: Optional[str],
                 key: Callable[[T], str] = _default_key) -> Optional[List[T]]:
    """Nouvel ordre après dépôt de `active_id` sur `over_id`, None si no-op."""
    indices = move_indices(order, active_id, over_id, key)
    if indices is None:
        return None
    return array_move(order, *indices)


class DragController:
    """Une seule session de glisser-déposer à la fois."""

    def __init__(self):
        self.active_id: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.active_id is not None

    def start(self, active_id: str) -> None:
        if self.active_id is not None and self.active_id != active_id:
            log.debug("drag %s remplacé par %s", self.active_id, active_id)
        self.active_id = active_id

    def cancel(self) -> None:
        self.active_id = None

    def drop(self, items: Sequence[T], over_id: Optional[str],
             key: Callable[[T], str] = _default_key) -> Optional[Tuple[int, int]]:
        """
        Termine la session. Retourne (from_index, to_index) à appliquer
        sur `items`, ou None si le dépôt ne change rien.
        """
        active_id, self.active_id = self.active_id, None
        if active_id is None:
            return None
        return move_indices(items, active_id, over_id, key)

    def active_item(self, items: Sequence[T], key: Callable[[T], str] = _default_key) -> Optional[T]:
        """Élément en cours de glissement (aperçu)."""
        if self.active_id is None:
            return None
        for item in items:
            if key(item) == self.active_id:
                return item
        return None
