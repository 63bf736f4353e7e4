"""
Générateur d'identifiants — préfixe + compteur monotone.

    >>> ids = IdGenerator()
    >>> ids.generate("section")
    'section-1001'
"""
import re
from typing import Iterable

from ..config import ID_BASELINE

_SUFFIX_RE = re.compile(r"-(\d+)$")
_STEM_RE   = re.compile(r"(?:-\d+)+$")


def id_stem(node_id: str) -> str:
    """Retire les suffixes numériques : "speakers-1004-1010" → "speakers"."""
    stem = _STEM_RE.sub("", node_id or "")
    return stem or "module"


class IdGenerator:
    """Compteur unique pour toute la durée d'une session d'édition."""

    def __init__(self, start: int = ID_BASELINE):
        self._counter = start

    @property
    def counter(self) -> int:
        return self._counter

    def generate(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def reserve(self, node_ids: Iterable[str]) -> None:
        """Place le compteur au-dessus de tout suffixe numérique déjà persisté."""
        for node_id in node_ids:
            m = _SUFFIX_RE.search(str(node_id))
            if m and int(m.group(1)) > self._counter:
                self._counter = int(m.group(1))
