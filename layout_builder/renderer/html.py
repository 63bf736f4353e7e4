"""
Renderer HTML — génère le document complet d'une Page publiée.

Section → Row → Column → Module. Chaque nœud porte son style normalisé
en attribut `style` ; le CSS libre (customCSS) part dans le <style> de page.
Dispatch module : slug du nom, puis préfixe d'id, puis catégorie.
"""
import json
import logging
import re
from html import escape
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from ..catalog.library import BLOCKS_CATEGORY, FORMS_CATEGORY
from ..core.ids import id_stem
from ..core.schemas import Column, Module, Page, Row, Section
from ..core.styling import generate_style_css, normalize_node_style, to_inline_css

log = logging.getLogger(__name__)


# ── Contenu externe ─────────────────────────────────────────────────────────

class RenderContent(BaseModel):
    """Collections récupérées hors layout (événements, billets, intervenants…)."""
    events:   List[Dict[str, Any]] = Field(default_factory=list)
    featured_events: List[Dict[str, Any]] = Field(default_factory=list)
    tickets:  List[Dict[str, Any]] = Field(default_factory=list)
    speakers: List[Dict[str, Any]] = Field(default_factory=list)
    forms:    Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    blocks:   Dict[str, Dict[str, Any]] = Field(default_factory=dict)


def active_speakers(participants: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Intervenants actifs (ou publiés, ou sans statut) : speakers et invités d'honneur."""
    out = []
    for p in participants:
        is_active  = p.get("status") in ("active", "published", None, "")
        is_speaker = p.get("participant_type") in ("speaker", "special_guest", None, "")
        if is_active and is_speaker:
            out.append(p)
    return out


def tickets_with_editions(tickets: List[Dict[str, Any]], ticket_id: Any = None) -> List[Dict[str, Any]]:
    """
    Billets ayant au moins une édition. Avec `ticket_id`, retourne les
    éditions de ce billet seul (liste vide s'il est absent).
    """
    available = [t for t in tickets if t.get("event_editions")]
    if ticket_id in (None, ""):
        return available
    for t in available:
        if str(t.get("id")) == str(ticket_id):
            return list(t["event_editions"])
    return []


def published_events(events: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [e for e in events if e.get("status") == "published"]


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_page(page: Page, sections: Optional[List[Section]] = None,
                content: Optional[RenderContent] = None,
                extra_head: str = "", extra_body_end: str = "") -> str:
    """Génère le HTML complet d'une page."""
    sections = page.sections if sections is None else sections
    content  = content or RenderContent()

    css = page_css(sections)
    sections_html = "\n".join(render_section(s, content) for s in sections)
    description = page.meta_description or page.description or ""
    meta_desc = f'<meta name="description" content="{escape(description)}">' if description else ""
    meta_kw   = f'<meta name="keywords" content="{escape(page.meta_keywords)}">' if page.meta_keywords else ""

    return f"""<!DOCTYPE html>
<html lang="{escape(str(page.settings.get('lang', 'en')))}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(page.title)}</title>
  {meta_desc}
  {meta_kw}
  <style>{css}</style>
  {extra_head}
</head>
<body>
{sections_html}
{extra_body_end}
</body>
</html>"""


def page_css(sections: List[Section]) -> str:
    """Règles CSS libres (customCSS) de tous les nœuds, ciblées par id."""
    rules = []
    for section in sections:
        nodes = [section]
        for row in section.rows:
            nodes.append(row)
            nodes.extend(row.columns)
        for node in nodes:
            custom = node.style.custom_css if node.style else None
            if custom:
                rules.append(generate_style_css({"customCSS": custom}, f"#{node.id}"))
    return "\n".join(rules)


# ── Arbre ───────────────────────────────────────────────────────────────────

def _style_attr(node: Any, extra: Optional[Dict[str, str]] = None) -> str:
    props = normalize_node_style(node)
    if extra:
        props.update(extra)
    css = to_inline_css(props)
    return f' style="{escape(css)}"' if css else ""


def render_section(section: Section, content: Optional[RenderContent] = None) -> str:
    content = content or RenderContent()
    rows_html = "\n".join(render_row(r, content) for r in section.rows)
    return (f'<section id="{escape(section.id)}" class="section section--{section.type}"'
            f'{_style_attr(section)}>\n{rows_html}\n</section>')


def render_row(row: Row, content: Optional[RenderContent] = None) -> str:
    content = content or RenderContent()
    cols_html = "\n".join(render_column(c, content) for c in row.columns)
    return (f'  <div id="{escape(row.id)}" class="row"{_style_attr(row, {"display": "flex"})}>'
            f'\n{cols_html}\n  </div>')


def render_column(column: Column, content: Optional[RenderContent] = None) -> str:
    content = content or RenderContent()
    width = f"{column.width:g}%"
    modules_html = "\n".join(render_module(m, content) for m in column.modules)
    return (f'    <div id="{escape(column.id)}" class="column"{_style_attr(column, {"width": width})}>'
            f'\n{modules_html}\n    </div>')


# ── Dispatch module ─────────────────────────────────────────────────────────

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def _slug(value: str) -> str:
    return _SLUG_RE.sub("_", (value or "").lower()).strip("_")


def module_kind(module: Module) -> Optional[str]:
    """
    Type de rendu. Blocs et formulaires de la bibliothèque d'abord (leur nom
    est libre), puis slug du nom, puis préfixe d'id.
    """
    if module.category == BLOCKS_CATEGORY:
        return "block"
    if module.category == FORMS_CATEGORY:
        return "form"
    for candidate in (_slug(module.name), id_stem(module.id)):
        if candidate in _RENDERERS:
            return candidate
    return None


def render_module(module: Module, content: Optional[RenderContent] = None) -> str:
    """Dispatch vers le renderer approprié."""
    content = content or RenderContent()
    kind = module_kind(module)
    if kind is None:
        log.debug("module sans renderer : %s", module.id)
        return f"<!-- Module non implémenté : {escape(module.id)} -->"
    inner = _RENDERERS[kind](module, content)
    return f'<div class="module module--{kind}" data-module-id="{escape(module.id)}">{inner}</div>'


# ── Renderers ───────────────────────────────────────────────────────────────

def _prop(module: Module, key: str, default: Any = "") -> Any:
    value = module.default_props.get(key)
    return default if value in (None, "") else value


def _limit(items: List[Any], module: Module) -> List[Any]:
    limit = module.default_props.get("limit")
    return items[:int(limit)] if isinstance(limit, (int, float)) and limit > 0 else items


def render_hero(module: Module, content: RenderContent) -> str:
    title    = escape(str(_prop(module, "title", module.name)))
    subtitle = _prop(module, "subtitle")
    label    = _prop(module, "ctaLabel")
    sub_html = f'<p class="hero__subtitle">{escape(str(subtitle))}</p>' if subtitle else ""
    cta_html = (f'<a href="{escape(str(_prop(module, "ctaHref", "#")))}" class="btn btn-primary">'
                f'{escape(str(label))}</a>') if label else ""
    return f'<div class="hero"><h1 class="hero__title">{title}</h1>{sub_html}{cta_html}</div>'


def render_text(module: Module, content: RenderContent) -> str:
    return f'<div class="text-module">{escape(str(_prop(module, "content")))}</div>'


def render_speakers(module: Module, content: RenderContent) -> str:
    speakers = _limit(active_speakers(content.speakers), module)
    if _prop(module, "showOnlyFeatured", False):
        speakers = [s for s in speakers if s.get("is_featured")]
    show_bio = module.default_props.get("showBio") is not False

    items = ""
    for s in speakers:
        name = escape(str(s.get("name") or s.get("full_name") or ""))
        role = s.get("designation") or s.get("participant_type") or ""
        bio  = f'<p class="speaker__bio">{escape(str(s["bio"]))}</p>' if show_bio and s.get("bio") else ""
        img  = f'<img src="{escape(str(s["image"]))}" alt="{name}">' if s.get("image") else ""
        items += (f'<div class="speaker">{img}<div class="speaker__name">{name}</div>'
                  f'<div class="speaker__role">{escape(str(role))}</div>{bio}</div>')

    layout = escape(str(_prop(module, "layout", "grid")))
    title  = escape(str(_prop(module, "title", "Speakers")))
    return f'<h2>{title}</h2><div class="speakers speakers--{layout}">{items}</div>'


def render_tickets(module: Module, content: RenderContent) -> str:
    items_html = ""
    for t in tickets_with_editions(content.tickets, module.default_props.get("ticketId")):
        name  = escape(str(t.get("name") or t.get("title") or ""))
        price = t.get("price")
        price_html = f'<div class="ticket__price">{escape(str(price))}</div>' if price is not None else ""
        items_html += f'<div class="ticket"><div class="ticket__name">{name}</div>{price_html}</div>'
    title = escape(str(_prop(module, "title", "Available Tickets")))
    return f'<h2>{title}</h2><div class="tickets">{items_html}</div>'


def _render_event_list(events: List[Dict[str, Any]], module: Module, title: str, description: str) -> str:
    items_html = ""
    for e in events:
        name = escape(str(e.get("title") or e.get("name") or ""))
        date = e.get("start_date") or e.get("date") or ""
        date_html = f'<time class="event__date">{escape(str(date))}</time>' if date else ""
        items_html += f'<div class="event"><div class="event__title">{name}</div>{date_html}</div>'
    view = escape(str(_prop(module, "view", "grid")))
    desc = escape(str(_prop(module, "description", description)))
    return (f'<h2>{escape(title)}</h2><p class="events__description">{desc}</p>'
            f'<div class="events events--{view}">{items_html}</div>')


def render_events(module: Module, content: RenderContent) -> str:
    return _render_event_list(published_events(content.events), module,
                              str(_prop(module, "title", "Ongoing Events")),
                              "Explore our current events")


def render_upcoming_events(module: Module, content: RenderContent) -> str:
    events = _limit(published_events(content.featured_events), module)
    return _render_event_list(events, module,
                              str(_prop(module, "title", "Upcoming & Recent Events")),
                              "Get your tickets now for these exciting upcoming events")


def render_block(module: Module, content: RenderContent) -> str:
    """Bloc de contenu : version distante si fournie, sinon props du module."""
    fetched = content.blocks.get(str(module.block_id)) or {}
    body = fetched.get("content") or _prop(module, "content")
    content_type = fetched.get("content_type") or _prop(module, "contentType", "html")
    if content_type == "html":
        return f'<section><div class="block">{body}</div></section>'
    return f'<section><div class="block prose">{escape(str(body))}</div></section>'


def _form_config(form: Dict[str, Any]) -> Dict[str, Any]:
    config = form.get("form_config")
    if isinstance(config, str):
        try:
            config = json.loads(config)
        except json.JSONDecodeError:
            log.warning("form_config illisible (form %s)", form.get("id"))
            config = None
    return config if isinstance(config, dict) else {"fields": []}


def render_form(module: Module, content: RenderContent) -> str:
    form_id = module.default_props.get("formId")
    form = content.forms.get(str(form_id)) if form_id is not None else None
    if form is None:
        form = module.default_props.get("formData")
    if not form:
        return '<div class="form-empty"><p>No form configured</p></div>'

    fields_html = ""
    for field in _form_config(form).get("fields", []):
        name  = escape(str(field.get("name") or field.get("id") or ""))
        label = escape(str(field.get("label") or name))
        ftype = escape(str(field.get("type") or "text"))
        required = " required" if field.get("required") else ""
        if ftype == "textarea":
            control = f'<textarea name="{name}"{required}></textarea>'
        else:
            control = f'<input type="{ftype}" name="{name}"{required}>'
        fields_html += f'<label class="form__field">{label}{control}</label>'

    return (f'<form class="form" data-form-id="{escape(str(form_id))}">'
            f'{fields_html}<button type="submit">Submit</button></form>')


_RENDERERS: Dict[str, Callable[[Module, RenderContent], str]] = {
    "hero":            render_hero,
    "text":            render_text,
    "speakers":        render_speakers,
    "tickets":         render_tickets,
    "events":          render_events,
    "upcoming_events": render_upcoming_events,
    "block":           render_block,
    "form":            render_form,
}


class HtmlRenderer:
    """Renderer HTML lié à un jeu de contenus externes."""

    def __init__(self, content: Optional[RenderContent] = None):
        self.content = content or RenderContent()

    def render_page(self, page: Page, sections: Optional[List[Section]] = None) -> str:
        return render_page(page, sections, self.content)

    def render_module(self, module: Module) -> str:
        return render_module(module, self.content)
