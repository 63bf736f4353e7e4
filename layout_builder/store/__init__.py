"""Persistance des pages — contrat + implémentations HTTP et SQL."""
from .base import StoreResult, PageStore, build_page_payload, unwrap_record
from .http import HttpPageStore, api_request
from .sql import SqlPageStore

__all__ = [
    "StoreResult",
    "PageStore",
    "build_page_payload",
    "unwrap_record",
    "HttpPageStore",
    "api_request",
    "SqlPageStore",
]
