"""
Exceptions du layout builder.

Les adresses invalides (section/row/colonne inexistante) ne lèvent jamais :
elles produisent un résultat NotFound (voir layout/results.py).
"""
from typing import List, Optional


class LayoutBuilderError(Exception):
    """Erreur de base du module."""


class ParseError(LayoutBuilderError, ValueError):
    """Document layout illisible (JSON invalide ou forme inattendue)."""


class PageValidationError(LayoutBuilderError):
    """Champs obligatoires de la page manquants ou invalides avant sauvegarde."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class TransportError(LayoutBuilderError):
    """Échec de communication avec le service de persistance."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
