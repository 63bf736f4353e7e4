"""
Sérialisation / parsing du document layout.

Formes acceptées en entrée :
  [ Section, ... ]                                    → historique
  { "sections": [ Section, ... ], "meta": {...} }     → courante

Sortie canonique : { "sections": [...], "meta": { "version": 2 } }
"""
import json
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..config import LAYOUT_VERSION
from ..core.defaults import starter_layout
from ..core.schemas import Section
from ..errors import ParseError

log = logging.getLogger(__name__)

LayoutDocument = Union[str, bytes, List[Any], Dict[str, Any]]


# ── Sérialisation ───────────────────────────────────────────────────────────

def dump_sections(sections: List[Section]) -> List[dict]:
    return [s.model_dump(by_alias=True, exclude_none=True, mode="json") for s in sections]


def serialize(sections: List[Section], meta: Optional[Dict[str, Any]] = None) -> str:
    """Arbre → chaîne JSON canonique."""
    doc = {
        "sections": dump_sections(sections),
        "meta": {"version": LAYOUT_VERSION, **(meta or {})},
    }
    return json.dumps(doc, ensure_ascii=False)


# ── Parsing ─────────────────────────────────────────────────────────────────

def _decode(document: LayoutDocument) -> Any:
    data = document
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Encodage invalide : {e}") from e
    # Deux passes : certains documents ont été encodés deux fois
    for _ in range(2):
        if not isinstance(data, str):
            break
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ParseError(f"JSON invalide : {e}") from e
        except RecursionError as e:
            raise ParseError("JSON trop profondément imbriqué") from e
    return data


def _migrate_legacy_section(raw: Any) -> Any:
    """Document historique : `settings` d'une row sert de style si `style` est vide."""
    if not isinstance(raw, dict) or not isinstance(raw.get("rows"), list):
        return raw
    rows = []
    for row in raw["rows"]:
        if isinstance(row, dict) and not row.get("style") and row.get("settings"):
            row = {**row, "style": row["settings"]}
        rows.append(row)
    return {**raw, "rows": rows}


def parse(document: LayoutDocument) -> List[Section]:
    """
    Document → liste de sections.
    Lève ParseError si le JSON est illisible ou si sa forme est inattendue.
    """
    data = _decode(document)

    if isinstance(data, list):
        raw_sections = [_migrate_legacy_section(s) for s in data]
    elif isinstance(data, dict) and isinstance(data.get("sections"), list):
        raw_sections = data["sections"]
    else:
        raise ParseError(f"Structure de layout inattendue : {type(data).__name__}")

    try:
        return [Section.model_validate(s) for s in raw_sections]
    except ValidationError as e:
        raise ParseError(f"Section invalide : {e.error_count()} erreur(s)\n{e}") from e


def parse_or_default(document: Optional[LayoutDocument]) -> List[Section]:
    """Comme parse(), mais retombe sur le layout de départ au lieu d'échouer."""
    if document is None or document == "":
        return starter_layout()
    try:
        return parse(document)
    except ParseError as e:
        log.warning("layout illisible, layout de départ utilisé : %s", e)
        return starter_layout()


def extract_layout_json(page_data: Dict[str, Any]) -> Optional[LayoutDocument]:
    """Document layout d'un enregistrement page : page_layout.layout_json puis layout_json."""
    page_layout = page_data.get("page_layout") or {}
    if isinstance(page_layout, dict) and page_layout.get("layout_json"):
        return page_layout["layout_json"]
    return page_data.get("layout_json") or None
