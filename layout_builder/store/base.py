"""
Contrat du service de persistance des pages.

getPage / createPage / updatePage → StoreResult {success, data?, error?}
Le document layout voyage sérialisé sous la clé `layout_json`.
"""
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel

from ..core.schemas import Page, Section
from ..layout.parser import serialize

PageId = Union[int, str]


class StoreResult(BaseModel):
    success:     bool
    data:        Optional[Any] = None
    error:       Optional[str] = None
    status_code: Optional[int] = None


@runtime_checkable
class PageStore(Protocol):
    def get_page(self, page_id: PageId) -> StoreResult: ...
    def create_page(self, payload: Dict[str, Any]) -> StoreResult: ...
    def update_page(self, page_id: PageId, payload: Dict[str, Any]) -> StoreResult: ...


def build_page_payload(page: Page, sections: Optional[List[Section]] = None) -> Dict[str, Any]:
    """Métadonnées de la page + document layout sérialisé."""
    sections = page.sections if sections is None else sections
    payload = page.model_dump(exclude={"sections", "id"})
    payload["layout_json"] = serialize(
        sections,
        meta={"isCustomPage": page.page_type == "custom", "pageType": page.page_type},
    )
    return payload


def unwrap_record(data: Any) -> Dict[str, Any]:
    """Les APIs renvoient soit l'enregistrement, soit {"data": enregistrement}."""
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data if isinstance(data, dict) else {}
