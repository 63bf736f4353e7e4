"""
Schémas Pydantic du layout builder.
Arbre ordonné : Page → Section → Row → Column → Module

Les clés JSON suivent le document persisté (camelCase : defaultProps,
backgroundColor…) ; les attributs Python sont en snake_case via alias.
Deux enregistrements de style coexistent sur chaque nœud :
  - style   : schéma historique (padding/margin en {top,right,bottom,left})
  - styling : schéma courant (chaînes raccourcies "10px 20px", border*, opacity)
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SectionType = Literal["header", "footer", "content", "custom"]
PageStatus  = Literal["draft", "published", "archived"]

_SECTION_TYPES = ("header", "footer", "content", "custom")


class _Record(BaseModel):
    """Base des enregistrements persistés : alias camelCase + clés inconnues conservées."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ── Styles ──────────────────────────────────────────────────────────────────

class SpacingBox(_Record):
    """Espacement par côté (schéma historique)."""
    top:    str = "0px"
    right:  str = "0px"
    bottom: str = "0px"
    left:   str = "0px"


class NodeStyle(_Record):
    """Style historique d'un nœud (champ `style`)."""
    background_color:    Optional[str] = Field(default=None, alias="backgroundColor")
    background_image:    Optional[str] = Field(default=None, alias="backgroundImage")
    background_size:     Optional[str] = Field(default=None, alias="backgroundSize")
    background_position: Optional[str] = Field(default=None, alias="backgroundPosition")
    padding:             Optional[Union[SpacingBox, str]] = None
    margin:              Optional[Union[SpacingBox, str]] = None
    border:              Optional[str] = None
    border_radius:       Optional[str] = Field(default=None, alias="borderRadius")
    box_shadow:          Optional[str] = Field(default=None, alias="boxShadow")
    text_align:          Optional[str] = Field(default=None, alias="textAlign")
    vertical_align:      Optional[str] = Field(default=None, alias="verticalAlign")
    min_height:          Optional[str] = Field(default=None, alias="minHeight")
    gap:                 Optional[str] = None
    custom_css:          Optional[str] = Field(default=None, alias="customCSS")


class NodeStyling(_Record):
    """Style courant d'un nœud (champ `styling`) — valeurs raccourcies CSS."""
    background_color:    Optional[str] = Field(default=None, alias="backgroundColor")
    background_image:    Optional[str] = Field(default=None, alias="backgroundImage")
    background_size:     Optional[str] = Field(default=None, alias="backgroundSize")
    background_position: Optional[str] = Field(default=None, alias="backgroundPosition")
    background_repeat:   Optional[str] = Field(default=None, alias="backgroundRepeat")
    padding:             Optional[str] = None
    margin:              Optional[str] = None
    min_height:          Optional[str] = Field(default=None, alias="minHeight")
    max_height:          Optional[str] = Field(default=None, alias="maxHeight")
    border_color:        Optional[str] = Field(default=None, alias="borderColor")
    border_width:        Optional[str] = Field(default=None, alias="borderWidth")
    border_style:        Optional[str] = Field(default=None, alias="borderStyle")
    border_radius:       Optional[str] = Field(default=None, alias="borderRadius")
    box_shadow:          Optional[str] = Field(default=None, alias="boxShadow")
    opacity:             Optional[float] = None
    text_align:          Optional[str] = Field(default=None, alias="textAlign")
    vertical_align:      Optional[str] = Field(default=None, alias="verticalAlign")


# ── Arbre ───────────────────────────────────────────────────────────────────

class Module(_Record):
    """Module (feuille) — copie d'un gabarit du catalogue avec un id propre."""
    id:            str
    name:          str = ""
    category:      str = ""
    description:   str = ""
    icon:          Optional[str] = None
    tags:          List[str] = Field(default_factory=list)
    default_props: Dict[str, Any] = Field(default_factory=dict, alias="defaultProps")
    block_id:      Optional[Union[int, str]] = Field(default=None, alias="blockId")


class Column(_Record):
    """Colonne — largeur en pourcentage de la row."""
    id:      str
    width:   Union[int, float] = 100
    style:   Optional[NodeStyle] = None
    styling: Optional[NodeStyling] = None
    modules: List[Module] = Field(default_factory=list)


class Row(_Record):
    """Row — colonnes dont les largeurs totalisent ~100 (non validé)."""
    id:       str
    style:    Optional[NodeStyle] = None
    styling:  Optional[NodeStyling] = None
    settings: Optional[Dict[str, Any]] = None
    columns:  List[Column] = Field(default_factory=list)


class Section(_Record):
    """Section — empilement vertical, `type` purement informatif."""
    id:      str
    name:    str = "Section"
    type:    SectionType = "custom"
    style:   Optional[NodeStyle] = None
    styling: Optional[NodeStyling] = None
    rows:    List[Row] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        return v if v in _SECTION_TYPES else "custom"


# ── Page ────────────────────────────────────────────────────────────────────

class Page(BaseModel):
    """Page complète : métadonnées + layout (liste ordonnée de sections)."""
    model_config = ConfigDict(extra="ignore")

    id:               Optional[Union[int, str]] = None
    title:            str = "New Page"
    slug:             str = "new-page"
    status:           PageStatus = "draft"
    page_type:        str = "custom"
    show_in_nav:      int = 0
    description:      Optional[str] = None
    meta_description: str = ""
    meta_keywords:    str = ""
    settings:         Dict[str, Any] = Field(default_factory=dict)
    sections:         List[Section] = Field(default_factory=list)

    @field_validator("meta_description", "meta_keywords", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or ""
