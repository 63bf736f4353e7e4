"""
Module Library — catalogue en lecture seule des gabarits insérables.

Sources :
  - modules intégrés (builtin.py)
  - blocs de contenu  GET /tenant/blocks        → "Custom Blocks"
  - formulaires       GET /tenant/forms-builder → "Form Builder"

Seuls les descripteurs `status == "published"` entrent au catalogue.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.schemas import Module
from ..errors import TransportError
from ..store.http import api_request
from .builtin import BUILTIN_MODULES

log = logging.getLogger(__name__)

BLOCKS_CATEGORY = "Custom Blocks"
FORMS_CATEGORY  = "Form Builder"


# ── Descripteurs distants ───────────────────────────────────────────────────

class BlockDescriptor(BaseModel):
    model_config = ConfigDict(extra="allow")
    id:           Union[int, str]
    name:         str = "Custom Block"
    content:      Optional[str] = None
    content_type: Optional[str] = None
    description:  Optional[str] = None
    status:       str = "draft"


class FormDescriptor(BaseModel):
    model_config = ConfigDict(extra="allow")
    id:          Union[int, str]
    name:        str = "Form"
    form_config: Any = None
    form_type:   Optional[str] = None
    status:      str = "draft"


def is_published(descriptor: Union[BlockDescriptor, FormDescriptor]) -> bool:
    return descriptor.status == "published"


def block_to_module(block: BlockDescriptor) -> Module:
    content = block.content or ""
    return Module(
        id=f"block-{block.id}",
        name=block.name,
        description=block.description or f"Custom content block: {content[:50]}",
        icon="📄",
        category=BLOCKS_CATEGORY,
        tags=["blocks", "content", "custom"],
        default_props={
            "content": content,
            "contentType": block.content_type or "html",
            "blockId": block.id,
        },
        block_id=block.id,
    )


def form_to_module(form: FormDescriptor) -> Module:
    form_data = form.model_dump(exclude_none=True)
    return Module(
        id=f"form-{form.id}",
        name=form.name,
        description=form.form_type or "Custom form",
        icon="📝",
        category=FORMS_CATEGORY,
        tags=["form", "builder", "custom"],
        default_props={"formId": form.id, "formData": form_data},
    )


# ── Sources ─────────────────────────────────────────────────────────────────

class LibrarySource(Protocol):
    def list_blocks(self) -> List[Dict[str, Any]]: ...
    def list_forms(self) -> List[Dict[str, Any]]: ...


def _as_list(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("data", [])
    return data if isinstance(data, list) else []


class HttpLibrarySource:
    """Blocs et formulaires depuis l'API tenant."""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        self.base_url = base_url
        self.token    = token

    def list_blocks(self) -> List[Dict[str, Any]]:
        return _as_list(api_request("GET", "/tenant/blocks", base_url=self.base_url, token=self.token))

    def list_forms(self) -> List[Dict[str, Any]]:
        return _as_list(api_request("GET", "/tenant/forms-builder", base_url=self.base_url, token=self.token))


# ── Catalogue ───────────────────────────────────────────────────────────────

def _descriptors(raw: Iterable[Dict[str, Any]], model):
    out = []
    for item in raw:
        try:
            out.append(model.model_validate(item))
        except ValidationError as e:
            log.warning("descripteur ignoré (%s) : %s", model.__name__, e.error_count())
    return out


class ModuleCatalog:
    """
    Catalogue des gabarits. Ne touche jamais à l'arbre : l'insertion copie
    le gabarit (voir layout.modules.add_module).
    """

    def __init__(self, builtin: Optional[List[Module]] = None):
        self._builtin: List[Module] = list(BUILTIN_MODULES if builtin is None else builtin)
        self._blocks:  List[Module] = []
        self._forms:   List[Module] = []

    def load_blocks(self, raw: Iterable[Dict[str, Any]]) -> int:
        self._blocks = [block_to_module(b) for b in _descriptors(raw, BlockDescriptor) if is_published(b)]
        return len(self._blocks)

    def load_forms(self, raw: Iterable[Dict[str, Any]]) -> int:
        self._forms = [form_to_module(f) for f in _descriptors(raw, FormDescriptor) if is_published(f)]
        return len(self._forms)

    def refresh(self, source: LibrarySource) -> bool:
        """
        Recharge blocs et formulaires. Une source en échec laisse sa partie
        du catalogue inchangée ; retourne False si au moins une a échoué.
        """
        ok = True
        try:
            n = self.load_blocks(source.list_blocks())
            log.info("catalogue : %d bloc(s) publiés", n)
        except TransportError as e:
            log.warning("catalogue : blocs indisponibles — %s", e)
            ok = False
        try:
            n = self.load_forms(source.list_forms())
            log.info("catalogue : %d formulaire(s) publiés", n)
        except TransportError as e:
            log.warning("catalogue : formulaires indisponibles — %s", e)
            ok = False
        return ok

    @property
    def modules(self) -> List[Module]:
        return [*self._builtin, *self._blocks, *self._forms]

    def categories(self) -> List[str]:
        seen: List[str] = []
        for m in self.modules:
            if m.category not in seen:
                seen.append(m.category)
        return seen

    def get(self, template_id: str) -> Optional[Module]:
        for m in self.modules:
            if m.id == template_id:
                return m
        return None

    def search(self, term: str = "", category: Optional[str] = None) -> List[Module]:
        """Filtre sur nom, description et tags (insensible à la casse) + catégorie."""
        needle = (term or "").lower()

        def matches(m: Module) -> bool:
            if category and m.category != category:
                return False
            if not needle:
                return True
            return (needle in m.name.lower()
                    or needle in m.description.lower()
                    or any(needle in t.lower() for t in m.tags))

        return [m for m in self.modules if matches(m)]
