"""
Client HTTP du service de persistance (API tenant).

POST  /tenant/pages          → création
PATCH /tenant/pages/{id}     → mise à jour
GET   /tenant/pages/{id}     → lecture
"""
import logging
from typing import Any, Dict, Optional

import requests

from .. import config
from ..errors import TransportError
from .base import PageId, StoreResult

log = logging.getLogger(__name__)


def api_request(method: str, endpoint: str, json: Optional[Dict[str, Any]] = None,
                base_url: Optional[str] = None, token: Optional[str] = None,
                timeout: Optional[float] = None) -> Any:
    """
    Appel JSON vers l'API. Lève TransportError (avec status_code) sur échec
    réseau ou réponse 4xx/5xx ; le message de l'API est repris s'il existe.
    """
    base    = (base_url or config.PAGES_API_URL).rstrip("/")
    url     = f"{base}/{endpoint.lstrip('/')}"
    token   = config.PAGES_API_TOKEN if token is None else token
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        resp = requests.request(method, url, json=json, headers=headers,
                                timeout=timeout or config.HTTP_TIMEOUT)
    except requests.RequestException as e:
        log.error("%s %s — %s", method, url, e)
        raise TransportError(str(e)) from e

    if not resp.ok:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        message = (body.get("message") if isinstance(body, dict) else None) or resp.reason or "Request failed"
        if resp.status_code >= 500:
            log.error("Server Error %s at %s %s", resp.status_code, method, url)
        raise TransportError(message, status_code=resp.status_code)

    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        log.error("%s %s — réponse non JSON", method, url)
        raise TransportError(f"Invalid JSON response: {e}", status_code=resp.status_code) from e


class HttpPageStore:
    """PageStore adossé à l'API tenant."""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url
        self.token    = token
        self.timeout  = timeout

    def _call(self, method: str, endpoint: str, payload: Optional[Dict[str, Any]] = None) -> StoreResult:
        try:
            data = api_request(method, endpoint, json=payload, base_url=self.base_url,
                               token=self.token, timeout=self.timeout)
        except TransportError as e:
            return StoreResult(success=False, error=str(e), status_code=e.status_code)
        return StoreResult(success=True, data=data)

    def get_page(self, page_id: PageId) -> StoreResult:
        return self._call("GET", f"/tenant/pages/{page_id}")

    def create_page(self, payload: Dict[str, Any]) -> StoreResult:
        return self._call("POST", "/tenant/pages", payload)

    def update_page(self, page_id: PageId, payload: Dict[str, Any]) -> StoreResult:
        return self._call("PATCH", f"/tenant/pages/{page_id}", payload)
