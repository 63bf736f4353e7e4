"""SQLite — PageStore local (init + session + CRUD)."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from .. import config
from .base import PageId, StoreResult
from .models import Base, PageDB

log = logging.getLogger(__name__)

_COLUMNS = (
    "title", "slug", "status", "page_type", "show_in_nav", "description",
    "meta_description", "meta_keywords", "layout_json",
)


def _to_dict(p: PageDB) -> Dict[str, Any]:
    return {
        "id":               p.id,
        "title":            p.title,
        "slug":             p.slug,
        "status":           p.status,
        "page_type":        p.page_type,
        "show_in_nav":      p.show_in_nav,
        "description":      p.description,
        "meta_description": p.meta_description or "",
        "meta_keywords":    p.meta_keywords or "",
        "settings":         json.loads(p.settings or "{}"),
        "created_at":       p.created_at.isoformat() if p.created_at else None,
        "updated_at":       p.updated_at.isoformat() if p.updated_at else None,
        "page_layout":      {"page_id": p.id, "page_slug": p.slug, "layout_json": p.layout_json},
    }


def _apply(p: PageDB, payload: Dict[str, Any]) -> None:
    for key in _COLUMNS:
        if key in payload:
            setattr(p, key, payload[key])
    if "settings" in payload:
        p.settings = json.dumps(payload["settings"] or {}, ensure_ascii=False)


class SqlPageStore:
    """PageStore adossé à une base SQLite (ou toute URL SQLAlchemy)."""

    def __init__(self, db_url: Optional[str] = None):
        if db_url is None:
            Path(config.DB_PATH).parent.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{config.DB_PATH}"
        connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
        self.engine       = create_engine(db_url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    # ── PageStore ──

    def get_page(self, page_id: PageId) -> StoreResult:
        with self.session() as db:
            p = db.get(PageDB, int(page_id)) if str(page_id).isdigit() else None
            if p is None:
                return StoreResult(success=False, error="Page not found", status_code=404)
            return StoreResult(success=True, data=_to_dict(p))

    def create_page(self, payload: Dict[str, Any]) -> StoreResult:
        with self.session() as db:
            p = PageDB()
            _apply(p, payload)
            db.add(p)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                log.warning("create_page: %s", e.orig)
                return StoreResult(success=False, error=f"Slug already used: {payload.get('slug')}",
                                   status_code=422)
            db.refresh(p)
            log.info("page créée id=%s slug=%s", p.id, p.slug)
            return StoreResult(success=True, data=_to_dict(p))

    def update_page(self, page_id: PageId, payload: Dict[str, Any]) -> StoreResult:
        with self.session() as db:
            p = db.get(PageDB, int(page_id)) if str(page_id).isdigit() else None
            if p is None:
                return StoreResult(success=False, error="Page not found", status_code=404)
            _apply(p, payload)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                log.warning("update_page: %s", e.orig)
                return StoreResult(success=False, error=f"Slug already used: {payload.get('slug')}",
                                   status_code=422)
            db.refresh(p)
            return StoreResult(success=True, data=_to_dict(p))

    # ── Lectures complémentaires ──

    def get_page_by_slug(self, slug: str) -> StoreResult:
        with self.session() as db:
            p = db.query(PageDB).filter_by(slug=slug).first()
            if p is None:
                return StoreResult(success=False, error="Page not found", status_code=404)
            return StoreResult(success=True, data=_to_dict(p))

    def list_pages(self, page_type: Optional[str] = None) -> List[Dict[str, Any]]:
        with self.session() as db:
            q = db.query(PageDB)
            if page_type:
                q = q.filter_by(page_type=page_type)
            return [_to_dict(p) for p in q.order_by(PageDB.id).all()]

    def delete_page(self, page_id: PageId) -> StoreResult:
        with self.session() as db:
            p = db.get(PageDB, int(page_id)) if str(page_id).isdigit() else None
            if p is None:
                return StoreResult(success=False, error="Page not found", status_code=404)
            db.delete(p)
            db.commit()
            return StoreResult(success=True, data={"id": int(page_id)})
