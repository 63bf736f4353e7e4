"""
PageBuilder — orchestrateur de l'édition d'une page.

Possède l'enregistrement page et l'arbre de sections (écrivain unique),
branche le chargement / la sauvegarde sur le service de persistance et
expose l'API d'édition consolidée.

Cycle de vie :
    idle → loading → ready | load_failed
    ready → saving → save_succeeded | save_failed → ready (après SAVE_STATUS_TTL)

Usage:
    >>> builder = PageBuilder(store=SqlPageStore(), page_id=12)
    >>> builder.load()
    >>> builder.add_section()
    >>> builder.save()
"""
import logging
import re
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .. import config
from ..catalog import ModuleCatalog
from ..catalog.library import LibrarySource
from ..core.defaults import starter_layout
from ..core.ids import IdGenerator
from ..core.schemas import Module, Page, Row, Section
from ..errors import PageValidationError, TransportError
from ..layout import modules as mod_ops
from ..layout import sections as sec_ops
from ..layout.parser import extract_layout_json, parse_or_default
from ..layout.queries import find_column, find_section, iter_ids
from ..layout.results import Address, MutationResult, Ok
from ..layout.tree import not_found
from ..store.base import PageId, PageStore, StoreResult, build_page_payload, unwrap_record
from .drag import DragController

log = logging.getLogger(__name__)


class EditorStatus(str, Enum):
    IDLE           = "idle"
    LOADING        = "loading"
    READY          = "ready"
    LOAD_FAILED    = "load_failed"
    SAVING         = "saving"
    SAVE_SUCCEEDED = "save_succeeded"
    SAVE_FAILED    = "save_failed"


_TRANSIENT = (EditorStatus.SAVE_SUCCEEDED, EditorStatus.SAVE_FAILED)


class SaveOutcome(BaseModel):
    success: bool
    page_id: Optional[Union[int, str]] = None
    error:   Optional[str] = None
    errors:  List[str] = Field(default_factory=list)


# ── Validation page ─────────────────────────────────────────────────────────

SLUG_PATTERN    = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MIN_SLUG_LENGTH = 3
MAX_SLUG_LENGTH = 100
MAX_TITLE_LENGTH = 255


def validate_page(page: Page) -> List[str]:
    """Erreurs bloquantes avant sauvegarde (liste vide = page valide)."""
    errors = []
    title = (page.title or "").strip()
    slug  = (page.slug or "").strip()
    if not title:
        errors.append("Title is required")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be at most {MAX_TITLE_LENGTH} characters")
    if not slug:
        errors.append("Slug is required")
    elif not MIN_SLUG_LENGTH <= len(slug) <= MAX_SLUG_LENGTH:
        errors.append(f"Slug must be between {MIN_SLUG_LENGTH} and {MAX_SLUG_LENGTH} characters")
    elif not SLUG_PATTERN.match(slug):
        errors.append("Slug may only contain lowercase letters, digits and single hyphens")
    return errors


def check_page(page: Page) -> None:
    """Lève PageValidationError si la page ne peut pas être sauvegardée."""
    errors = validate_page(page)
    if errors:
        raise PageValidationError(errors)


def _save_error_message(result: StoreResult) -> str:
    message = result.error or "Failed to save page"
    if result.status_code == 422:
        return f"Validation error: {message}"
    return message


# ── Orchestrateur ───────────────────────────────────────────────────────────

class PageBuilder:
    """État d'édition d'une page : métadonnées + layout + statut de cycle de vie."""

    def __init__(
        self,
        store: PageStore,
        page_id: Optional[PageId] = None,
        page_type: str = "custom",
        initial_page: Optional[Union[Page, Dict[str, Any]]] = None,
        ids: Optional[IdGenerator] = None,
        catalog: Optional[ModuleCatalog] = None,
        clock: Callable[[], float] = time.monotonic,
        status_ttl: Optional[float] = None,
        on_save_success: Optional[Callable[[Dict[str, Any]], None]] = None,
        on_save_error: Optional[Callable[[str], None]] = None,
    ):
        self.store        = store
        self.page_id      = page_id
        self.page_type    = page_type
        self.initial_page = initial_page
        self.ids          = ids or IdGenerator()
        self.catalog      = catalog or ModuleCatalog()
        self.drag         = DragController()
        self.clock        = clock
        self.status_ttl   = config.SAVE_STATUS_TTL if status_ttl is None else status_ttl
        self.on_save_success = on_save_success
        self.on_save_error   = on_save_error

        self.page: Page = Page(id=page_id, page_type=page_type, sections=starter_layout())
        self.selected_section: Optional[str] = None
        self.library_target: Optional[Address] = None
        self.load_error: Optional[str] = None

        self._status          = EditorStatus.IDLE
        self._status_expires: Optional[float] = None
        self._save_error: Optional[str] = None
        self._generation      = 0
        self._closed          = False

    # ── Statut ──

    def _set_status(self, status: EditorStatus, ttl: Optional[float] = None) -> None:
        self._status = status
        self._status_expires = self.clock() + ttl if ttl is not None else None

    @property
    def status(self) -> EditorStatus:
        if self._status in _TRANSIENT and self._status_expires is not None \
                and self.clock() >= self._status_expires:
            self._status = EditorStatus.READY
            self._status_expires = None
            self._save_error = None
        return self._status

    @property
    def save_error(self) -> Optional[str]:
        return self._save_error if self.status == EditorStatus.SAVE_FAILED else None

    @property
    def is_loading(self) -> bool:
        return self.status == EditorStatus.LOADING

    @property
    def is_saving(self) -> bool:
        return self.status == EditorStatus.SAVING

    @property
    def save_success(self) -> bool:
        return self.status == EditorStatus.SAVE_SUCCEEDED

    @property
    def sections(self) -> List[Section]:
        return list(self.page.sections)

    def close(self) -> None:
        """L'interface d'édition est fermée : les résultats en retard sont ignorés."""
        self._closed = True
        self.drag.cancel()

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    # ── Chargement ──

    def _page_from_record(self, record: Dict[str, Any]) -> Page:
        layout   = extract_layout_json(record)
        sections = parse_or_default(layout) if layout else starter_layout()
        data = {k: v for k, v in record.items() if k not in ("sections", "page_layout", "layout_json")}
        if not data.get("page_type"):
            data["page_type"] = self.page_type
        if data.get("id") is None and self.page_id is not None:
            data["id"] = self.page_id
        return Page.model_validate({**data, "sections": sections})

    def _fetch(self) -> Page:
        if self.initial_page is not None:
            if isinstance(self.initial_page, Page):
                return self.initial_page
            return self._page_from_record(self.initial_page)
        if self.page_id is not None:
            result = self.store.get_page(self.page_id)
            if not result.success:
                raise TransportError(result.error or "Failed to load page", status_code=result.status_code)
            return self._page_from_record(unwrap_record(result.data))
        return Page(page_type=self.page_type, sections=starter_layout())

    def load(self) -> EditorStatus:
        self._generation += 1
        generation = self._generation
        self._set_status(EditorStatus.LOADING)
        self.load_error = None

        try:
            page = self._fetch()
        except (TransportError, ValidationError) as e:
            if self._is_stale(generation):
                return self._status
            log.error("chargement page %s : %s", self.page_id, e)
            self.load_error = str(e) or "Failed to load page data"
            self._set_status(EditorStatus.LOAD_FAILED)
            return self._status

        if self._is_stale(generation):
            log.debug("chargement page %s ignoré (obsolète)", self.page_id)
            return self._status

        self.page = page
        if page.id is not None:
            self.page_id = page.id
        self.ids.reserve(iter_ids(page.sections))
        self._set_status(EditorStatus.READY)
        log.info("page %s chargée : %d section(s)", self.page_id, len(page.sections))
        return self._status

    # ── Sauvegarde ──

    def _fail_save(self, message: str, errors: Optional[List[str]] = None) -> SaveOutcome:
        if self.on_save_error:
            self.on_save_error(message)
        return SaveOutcome(success=False, page_id=self.page_id, error=message, errors=errors or [])

    def save(self) -> SaveOutcome:
        """
        Valide puis envoie la page. Une validation en échec ne contacte pas
        le service ; un échec de transport laisse l'arbre intact pour réessayer.
        """
        status = self.status
        if status == EditorStatus.SAVING:
            return SaveOutcome(success=False, page_id=self.page_id, error="Save already in progress")
        if status in (EditorStatus.IDLE, EditorStatus.LOADING, EditorStatus.LOAD_FAILED):
            return SaveOutcome(success=False, page_id=self.page_id, error="Page is not loaded")

        try:
            check_page(self.page)
        except PageValidationError as e:
            return self._fail_save(f"Validation error: {e}", e.errors)

        self._set_status(EditorStatus.SAVING)
        self._save_error = None
        payload   = build_page_payload(self.page)
        is_create = self.page_id is None

        try:
            if is_create:
                result = self.store.create_page(payload)
            else:
                result = self.store.update_page(self.page_id, payload)
        except TransportError as e:
            result = StoreResult(success=False, error=str(e), status_code=e.status_code)
        except Exception as e:
            log.exception("sauvegarde page %s : erreur inattendue du service", self.page_id)
            result = StoreResult(success=False, error=str(e) or type(e).__name__)

        if not result.success:
            message = _save_error_message(result)
            log.error("sauvegarde page %s : %s", self.page_id, message)
            self._save_error = message
            self._set_status(EditorStatus.SAVE_FAILED, ttl=self.status_ttl)
            return self._fail_save(message)

        if is_create:
            new_id = unwrap_record(result.data).get("id")
            if new_id is not None:
                self.page_id = new_id
                self.page = self.page.model_copy(update={"id": new_id})

        self._set_status(EditorStatus.SAVE_SUCCEEDED, ttl=self.status_ttl)
        log.info("page %s sauvegardée", self.page_id)
        if self.on_save_success:
            self.on_save_success(payload)
        return SaveOutcome(success=True, page_id=self.page_id)

    # ── Page ──

    def update_page(self, **fields: Any) -> Page:
        """Met à jour les métadonnées (titre, slug, statut…) ; le layout passe par les mutateurs."""
        fields.pop("sections", None)
        data = {**self.page.model_dump(exclude={"sections"}), **fields, "sections": self.page.sections}
        self.page = Page.model_validate(data)
        return self.page

    def set_sections(self, sections: List[Section]) -> None:
        self.page = self.page.model_copy(update={"sections": list(sections)})

    def select_section(self, section_id: Optional[str]) -> None:
        self.selected_section = section_id

    def can_delete_section(self) -> bool:
        return sec_ops.can_delete_section(self.sections)

    def _apply(self, result: MutationResult) -> MutationResult:
        if result.ok:
            self.set_sections(result.sections)
        else:
            log.warning("mutation ignorée, adresse introuvable : %s", result.address)
        return result

    # ── Sections ──

    def add_section(self, name: str = "New Section", kind: str = "custom") -> MutationResult:
        return self._apply(Ok(sections=sec_ops.add_section(self.sections, self.ids, name=name, kind=kind)))

    def duplicate_section(self, section_id: str) -> MutationResult:
        return self._apply(sec_ops.duplicate_section(self.sections, section_id, self.ids))

    def delete_section(self, section_id: str) -> MutationResult:
        result = self._apply(sec_ops.delete_section(self.sections, section_id))
        if result.ok and self.selected_section == section_id:
            self.selected_section = None
        return result

    def rename_section(self, section_id: str, name: str) -> MutationResult:
        return self._apply(sec_ops.rename_section(self.sections, section_id, name))

    def update_section_style(self, section_id: str, style) -> MutationResult:
        return self._apply(sec_ops.update_section_style(self.sections, section_id, style))

    def update_section_styling(self, section_id: str, styling) -> MutationResult:
        return self._apply(sec_ops.update_section_styling(self.sections, section_id, styling))

    def update_section_rows(self, section_id: str, rows: List[Row]) -> MutationResult:
        return self._apply(sec_ops.update_section_rows(self.sections, section_id, rows))

    # ── Rows ──

    def add_row(self, section_id: str) -> MutationResult:
        return self._apply(sec_ops.add_row(self.sections, section_id, self.ids))

    def duplicate_row(self, section_id: str, row_id: str) -> MutationResult:
        return self._apply(sec_ops.duplicate_row(self.sections, section_id, row_id, self.ids))

    def delete_row(self, section_id: str, row_id: str) -> MutationResult:
        return self._apply(sec_ops.delete_row(self.sections, section_id, row_id))

    def change_row_layout(self, section_id: str, row_id: str, widths: List[float]) -> MutationResult:
        return self._apply(sec_ops.change_row_layout(self.sections, section_id, row_id, widths, self.ids))

    def update_column_widths(self, section_id: str, row_id: str,
                             widths: List[Optional[float]]) -> MutationResult:
        return self._apply(sec_ops.update_column_widths(self.sections, section_id, row_id, widths))

    def update_row_settings(self, section_id: str, row_id: str, settings: Dict[str, Any]) -> MutationResult:
        return self._apply(sec_ops.update_row_settings(self.sections, section_id, row_id, settings))

    def update_row_style(self, section_id: str, row_id: str, style) -> MutationResult:
        return self._apply(sec_ops.update_row_style(self.sections, section_id, row_id, style))

    def update_row_styling(self, section_id: str, row_id: str, styling) -> MutationResult:
        return self._apply(sec_ops.update_row_styling(self.sections, section_id, row_id, styling))

    def update_column_style(self, section_id: str, row_id: str, column_id: str, style) -> MutationResult:
        return self._apply(sec_ops.update_column_style(self.sections, section_id, row_id, column_id, style))

    def update_column_styling(self, section_id: str, row_id: str, column_id: str, styling) -> MutationResult:
        return self._apply(sec_ops.update_column_styling(self.sections, section_id, row_id, column_id, styling))

    # ── Modules ──

    def _resolve_template(self, template: Union[Module, Dict[str, Any], str]) -> Optional[Union[Module, Dict[str, Any]]]:
        if isinstance(template, str):
            found = self.catalog.get(template)
            if found is None:
                log.warning("gabarit inconnu : %s", template)
            return found
        return template

    def add_module(self, section_id: str, row_id: str, column_id: str,
                   template: Union[Module, Dict[str, Any], str]) -> MutationResult:
        """Insère une copie du gabarit (objet, dict ou id du catalogue) en fin de colonne."""
        resolved = self._resolve_template(template)
        if resolved is None:
            return not_found(self.sections, Address(
                section_id=section_id, row_id=row_id, column_id=column_id))
        return self._apply(mod_ops.add_module(self.sections, section_id, row_id, column_id, resolved, self.ids))

    def remove_module(self, section_id: str, row_id: str, column_id: str, index: int) -> MutationResult:
        return self._apply(mod_ops.remove_module(self.sections, section_id, row_id, column_id, index))

    def reorder_modules(self, section_id: str, row_id: str, column_id: str,
                        from_index: int, to_index: int) -> MutationResult:
        return self._apply(mod_ops.reorder_modules(self.sections, section_id, row_id, column_id,
                                                   from_index, to_index))

    # ── Module Library ──

    def refresh_catalog(self, source: LibrarySource) -> bool:
        if self._closed:
            return False
        return self.catalog.refresh(source)

    def open_library(self, section_id: str, row_id: str, column_id: str) -> None:
        self.library_target = Address(section_id=section_id, row_id=row_id, column_id=column_id)

    def close_library(self) -> None:
        self.library_target = None

    def select_module(self, template: Union[Module, Dict[str, Any], str]) -> Optional[MutationResult]:
        """Insère le gabarit choisi dans la colonne ciblée puis ferme la bibliothèque."""
        target, self.library_target = self.library_target, None
        if target is None:
            return None
        return self.add_module(target.section_id, target.row_id, target.column_id, template)

    # ── Drag & drop ──

    def start_drag(self, active_id: str) -> None:
        self.drag.start(active_id)

    def cancel_drag(self) -> None:
        self.drag.cancel()

    def active_section(self) -> Optional[Section]:
        return self.drag.active_item(self.sections)

    def drop_section(self, over_id: Optional[str]) -> Optional[MutationResult]:
        move = self.drag.drop(self.sections, over_id)
        if move is None:
            return None
        return self._apply(sec_ops.reorder_sections(self.sections, *move))

    def drop_row(self, section_id: str, over_id: Optional[str]) -> Optional[MutationResult]:
        section = find_section(self.sections, section_id)
        move = self.drag.drop(section.rows if section else [], over_id)
        if move is None:
            return None
        return self._apply(sec_ops.reorder_rows(self.sections, section_id, *move))

    def drop_module(self, section_id: str, row_id: str, column_id: str,
                    over_id: Optional[str]) -> Optional[MutationResult]:
        column = find_column(self.sections, section_id, row_id, column_id)
        move = self.drag.drop(column.modules if column else [], over_id)
        if move is None:
            return None
        return self.reorder_modules(section_id, row_id, column_id, *move)
