"""
Router FastAPI — endpoints layout builder.

POST /layout-builder/parse          → document layout → sections normalisées
POST /layout-builder/validate       → Page → {"valid": bool, "errors": [...]}
GET  /layout-builder/catalog        → modules insérables (recherche, catégorie)
GET  /layout-builder/pages          → liste des pages
GET  /layout-builder/pages/{id}     → page + sections
POST /layout-builder/pages          → création
PUT  /layout-builder/pages/{id}     → mise à jour
GET  /layout-builder/render/{slug}  → HTML (pages publiées uniquement)
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .catalog import ModuleCatalog
from .core.schemas import Page
from .editor.builder import check_page, validate_page
from .errors import PageValidationError, ParseError
from .layout.parser import dump_sections, extract_layout_json, parse, parse_or_default
from .renderer.base import Renderer
from .renderer.html import HtmlRenderer
from .store.base import StoreResult, build_page_payload
from .store.sql import SqlPageStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/layout-builder", tags=["layout_builder"])

_store: Optional[SqlPageStore] = None
_catalog = ModuleCatalog()


def get_store() -> SqlPageStore:
    """Store SQL partagé, créé au premier appel (surchargé dans les tests)."""
    global _store
    if _store is None:
        _store = SqlPageStore()
    return _store


def get_catalog() -> ModuleCatalog:
    return _catalog


def get_renderer() -> Renderer:
    return HtmlRenderer()


class LayoutDocumentIn(BaseModel):
    layout_json: Any


def _raise_for(result: StoreResult) -> None:
    if not result.success:
        raise HTTPException(result.status_code or 502, result.error or "Store error")


def _page_out(record: dict) -> dict:
    sections = parse_or_default(extract_layout_json(record))
    out = {k: v for k, v in record.items() if k not in ("layout_json", "page_layout")}
    out["sections"] = dump_sections(sections)
    return out


# ── Layout ──

@router.post("/parse", summary="Normalise un document layout")
def parse_layout(body: LayoutDocumentIn) -> dict:
    try:
        sections = parse(body.layout_json)
    except ParseError as e:
        raise HTTPException(422, str(e))
    return {"sections": dump_sections(sections)}


@router.post("/validate", summary="Valide une page sans la sauvegarder")
def validate(page: Page) -> dict:
    errors = validate_page(page)
    return {"valid": not errors, "errors": errors}


@router.get("/catalog", summary="Modules insérables")
def catalog(q: str = "", category: Optional[str] = None,
            cat: ModuleCatalog = Depends(get_catalog)) -> dict:
    modules = cat.search(q, category)
    return {
        "categories": cat.categories(),
        "modules":    [m.model_dump(by_alias=True, exclude_none=True) for m in modules],
    }


# ── Pages ──

@router.get("/pages", summary="Liste des pages")
def list_pages(page_type: Optional[str] = None, store: SqlPageStore = Depends(get_store)) -> list:
    return [_page_out(p) for p in store.list_pages(page_type)]


@router.get("/pages/{page_id}", summary="Page + sections")
def get_page(page_id: int, store: SqlPageStore = Depends(get_store)) -> dict:
    result = store.get_page(page_id)
    _raise_for(result)
    return _page_out(result.data)


@router.post("/pages", status_code=201, summary="Crée une page")
def create_page(page: Page, store: SqlPageStore = Depends(get_store)) -> dict:
    try:
        check_page(page)
    except PageValidationError as e:
        raise HTTPException(422, e.errors)
    result = store.create_page(build_page_payload(page))
    _raise_for(result)
    log.info("page créée via API : %s", page.slug)
    return _page_out(result.data)


@router.put("/pages/{page_id}", summary="Met à jour une page")
def update_page(page_id: int, page: Page, store: SqlPageStore = Depends(get_store)) -> dict:
    try:
        check_page(page)
    except PageValidationError as e:
        raise HTTPException(422, e.errors)
    result = store.update_page(page_id, build_page_payload(page))
    _raise_for(result)
    return _page_out(result.data)


# ── Rendu ──

@router.get("/render/{slug}", response_class=HTMLResponse, summary="Rend une page publiée")
def render(slug: str, store: SqlPageStore = Depends(get_store),
           renderer: Renderer = Depends(get_renderer)) -> HTMLResponse:
    result = store.get_page_by_slug(slug)
    if not result.success or result.data.get("status") != "published":
        raise HTTPException(404, "Page not found")
    record = result.data
    page = Page.model_validate(record)
    sections = parse_or_default(extract_layout_json(record))
    return HTMLResponse(renderer.render_page(page, sections))
