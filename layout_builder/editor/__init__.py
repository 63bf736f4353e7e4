"""Éditeur — orchestrateur + drag & drop."""
from .builder import PageBuilder, EditorStatus, SaveOutcome, validate_page, check_page
from .drag import DragController, compute_move, move_indices

__all__ = [
    "PageBuilder",
    "EditorStatus",
    "SaveOutcome",
    "validate_page",
    "check_page",
    "DragController",
    "compute_move",
    "move_indices",
]
