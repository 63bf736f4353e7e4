"""Tests persistance — SQLite (tmp_path) et client HTTP (requests simulé)."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from layout_builder.core.schemas import Page
from layout_builder.layout.parser import extract_layout_json, parse
from layout_builder.store import HttpPageStore, PageStore, SqlPageStore, build_page_payload
from layout_builder.store.base import unwrap_record


@pytest.fixture
def store(tmp_path):
    return SqlPageStore(f"sqlite:///{tmp_path / 'pages.db'}")


def test_build_page_payload(sections):
    payload = build_page_payload(Page(title="Home", slug="home", sections=sections))
    assert "sections" not in payload and "id" not in payload
    doc = json.loads(payload["layout_json"])
    assert doc["meta"] == {"version": 2, "isCustomPage": True, "pageType": "custom"}
    assert len(doc["sections"]) == 2


def test_unwrap_record():
    assert unwrap_record({"data": {"id": 1}}) == {"id": 1}
    assert unwrap_record({"id": 2}) == {"id": 2}
    assert unwrap_record(None) == {}


# ── SQLite ────────────────────────────────────────────────────────────────────

class TestSqlPageStore:
    def test_respecte_le_contrat(self, store):
        assert isinstance(store, PageStore)

    def test_creation_puis_lecture(self, store, sections):
        created = store.create_page(build_page_payload(Page(title="Home", slug="home", sections=sections)))
        assert created.success
        page_id = created.data["id"]

        fetched = store.get_page(page_id)
        assert fetched.data["slug"] == "home"
        assert fetched.data["page_layout"]["page_id"] == page_id
        assert [s.id for s in parse(extract_layout_json(fetched.data))] == ["header-section", "content-section"]

    def test_mise_a_jour(self, store):
        page_id = store.create_page({"title": "A", "slug": "aaa"}).data["id"]
        result = store.update_page(page_id, {"title": "B", "settings": {"lang": "fr"}})
        assert result.data["title"] == "B"
        assert result.data["settings"] == {"lang": "fr"}
        assert result.data["slug"] == "aaa"

    def test_slug_unique(self, store):
        store.create_page({"title": "A", "slug": "same"})
        result = store.create_page({"title": "B", "slug": "same"})
        assert not result.success
        assert result.status_code == 422
        assert "same" in result.error

    def test_page_absente(self, store):
        result = store.get_page(999)
        assert result.status_code == 404
        assert store.update_page("abc", {"title": "x"}).status_code == 404

    def test_lectures_complementaires(self, store):
        store.create_page({"title": "A", "slug": "aaa", "page_type": "custom"})
        store.create_page({"title": "B", "slug": "bbb", "page_type": "contact"})
        assert [p["slug"] for p in store.list_pages()] == ["aaa", "bbb"]
        assert [p["slug"] for p in store.list_pages("contact")] == ["bbb"]
        assert store.get_page_by_slug("bbb").data["title"] == "B"

    def test_suppression(self, store):
        page_id = store.create_page({"title": "A", "slug": "aaa"}).data["id"]
        assert store.delete_page(page_id).success
        assert store.get_page(page_id).status_code == 404


# ── HTTP ──────────────────────────────────────────────────────────────────────

def _response(status_code=200, body=None, reason="OK"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.reason = reason
    resp.content = json.dumps(body).encode() if body is not None else b""
    resp.json.return_value = body
    return resp


class TestHttpPageStore:
    def test_get_page(self, monkeypatch):
        calls = MagicMock(return_value=_response(body={"data": {"id": 3}}))
        monkeypatch.setattr(requests, "request", calls)
        store = HttpPageStore(base_url="http://api.test/api/", token="tok")

        result = store.get_page(3)
        assert result.success
        assert result.data == {"data": {"id": 3}}
        method, url = calls.call_args.args
        assert (method, url) == ("GET", "http://api.test/api/tenant/pages/3")
        assert calls.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"

    def test_update_en_patch(self, monkeypatch):
        calls = MagicMock(return_value=_response(body={"id": 3}))
        monkeypatch.setattr(requests, "request", calls)
        HttpPageStore(base_url="http://api.test").update_page(3, {"title": "T"})
        assert calls.call_args.args[0] == "PATCH"
        assert calls.call_args.kwargs["json"] == {"title": "T"}

    def test_message_de_l_api(self, monkeypatch):
        monkeypatch.setattr(requests, "request", MagicMock(
            return_value=_response(422, {"message": "Slug already used"}, reason="Unprocessable")))
        result = HttpPageStore(base_url="http://api.test").create_page({"slug": "x"})
        assert not result.success
        assert result.error == "Slug already used"
        assert result.status_code == 422

    def test_erreur_reseau(self, monkeypatch):
        monkeypatch.setattr(requests, "request", MagicMock(side_effect=requests.ConnectionError("refused")))
        result = HttpPageStore(base_url="http://api.test").get_page(1)
        assert not result.success
        assert result.status_code is None
        assert "refused" in result.error

    def test_reponse_non_json(self, monkeypatch):
        resp = _response(body={"id": 1})
        resp.content = b"<html>Bad gateway</html>"
        resp.json.side_effect = ValueError("Expecting value")
        monkeypatch.setattr(requests, "request", MagicMock(return_value=resp))
        result = HttpPageStore(base_url="http://api.test").create_page({"slug": "x"})
        assert not result.success
        assert result.status_code == 200
        assert "Invalid JSON" in result.error
