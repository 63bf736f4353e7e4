"""
Traduction des styles de nœuds → propriétés CSS prêtes au rendu.

Accepte les deux schémas (NodeStyle historique, NodeStyling courant) ou un
simple dict. Fonction pure : l'entrée n'est jamais modifiée, les champs non
renseignés sont omis, et une map déjà traduite ressort à l'identique.

    >>> to_render_properties({"padding": {"top": "1px", "right": "2px", "bottom": "3px", "left": "4px"}})
    {'padding': '1px 2px 3px 4px'}
"""
import re
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

StyleInput = Union[BaseModel, Dict[str, Any], None]

# Clés camelCase connues → propriété CSS
_PROPERTY_MAP: Dict[str, str] = {
    "backgroundColor":    "background-color",
    "backgroundImage":    "background-image",
    "backgroundSize":     "background-size",
    "backgroundPosition": "background-position",
    "backgroundRepeat":   "background-repeat",
    "padding":            "padding",
    "margin":             "margin",
    "border":             "border",
    "borderColor":        "border-color",
    "borderWidth":        "border-width",
    "borderStyle":        "border-style",
    "borderRadius":       "border-radius",
    "boxShadow":          "box-shadow",
    "opacity":            "opacity",
    "textAlign":          "text-align",
    "verticalAlign":      "vertical-align",
    "minHeight":          "min-height",
    "maxHeight":          "max-height",
    "gap":                "gap",
}

# Jamais traduites en propriété : CSS libre, réglages éditeur
_SKIPPED_KEYS = {"customCSS", "custom_css"}

_SIDES = ("top", "right", "bottom", "left")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _as_dict(style: StyleInput) -> Dict[str, Any]:
    if style is None:
        return {}
    if isinstance(style, BaseModel):
        return style.model_dump(by_alias=True, exclude_none=True)
    return dict(style)


def _fmt_number(v: float) -> str:
    return f"{v:g}"


def _spacing(value: Any) -> Optional[str]:
    """{top,right,bottom,left} → "t r b l" ; une chaîne est conservée telle quelle."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, dict):
        return " ".join(str(value.get(side) or "0px") for side in _SIDES)
    if isinstance(value, (int, float)):
        return f"{_fmt_number(value)}px"
    return str(value) if value else None


def _background_image(value: str) -> str:
    v = value.strip()
    if v.startswith(("url(", "linear-gradient(", "radial-gradient(", "none")):
        return v
    return f"url('{v}')"


def _opacity(value: Any) -> Optional[str]:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return _fmt_number(min(1.0, max(0.0, v)))


def to_render_properties(style: StyleInput) -> Dict[str, str]:
    """Traduit un enregistrement de style en propriétés CSS (clés kebab-case)."""
    out: Dict[str, str] = {}
    for key, value in _as_dict(style).items():
        if key in _SKIPPED_KEYS or value is None or value == "":
            continue
        prop = _PROPERTY_MAP.get(key)
        if prop is None:
            if isinstance(value, (dict, list, bool)):
                continue
            # Propriété déjà CSS ("font-size") ou camelCase inconnue ("fontSize")
            prop = key if "-" in key else _CAMEL_RE.sub("-", key).lower()
            out[prop] = _fmt_number(value) if isinstance(value, float) else str(value)
            continue

        if prop in ("padding", "margin"):
            rendered = _spacing(value)
        elif prop == "opacity":
            rendered = _opacity(value)
        elif prop == "background-image":
            rendered = _background_image(str(value))
        else:
            rendered = str(value)
        if rendered:
            out[prop] = rendered
    return out


def normalize_node_style(node: Any) -> Dict[str, str]:
    """
    Point unique de normalisation d'un nœud (Section, Row, Column).
    `style` (historique) d'abord, puis `styling` (courant) qui l'emporte.
    """
    props = to_render_properties(getattr(node, "style", None))
    props.update(to_render_properties(getattr(node, "styling", None)))
    return props


def to_inline_css(props: Dict[str, str]) -> str:
    """{"padding": "1px"} → "padding:1px" (attribut style HTML)."""
    return ";".join(f"{k}:{v}" for k, v in props.items())


def generate_style_css(style: StyleInput, selector: str) -> str:
    """Règle CSS complète pour un sélecteur, CSS libre (customCSS) ajouté en fin."""
    data  = _as_dict(style)
    rules = [f"{k}: {v};" for k, v in to_render_properties(data).items()]
    custom = data.get("customCSS") or data.get("custom_css")
    if custom:
        rules.append(str(custom).strip())
    if not rules:
        return ""
    body = "\n  ".join(rules)
    return f"{selector} {{\n  {body}\n}}"
