"""Tests router FastAPI — TestClient + base SQLite temporaire."""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from layout_builder.core.defaults import starter_layout
from layout_builder.layout.parser import dump_sections, serialize
from layout_builder.router import get_store, router
from layout_builder.store import SqlPageStore


@pytest.fixture
def store(tmp_path):
    return SqlPageStore(f"sqlite:///{tmp_path / 'api.db'}")


@pytest.fixture
def client(store):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


def _page(**kwargs):
    return {"title": "About", "slug": "about", "sections": dump_sections(starter_layout()), **kwargs}


class TestLayout:
    def test_parse(self, client):
        r = client.post("/layout-builder/parse", json={"layout_json": serialize(starter_layout())})
        assert r.status_code == 200
        assert [s["id"] for s in r.json()["sections"]] == ["header-section", "content-section"]

    def test_parse_illisible(self, client):
        r = client.post("/layout-builder/parse", json={"layout_json": "{oops"})
        assert r.status_code == 422

    def test_validate(self, client):
        assert client.post("/layout-builder/validate", json=_page()).json() == {"valid": True, "errors": []}
        body = client.post("/layout-builder/validate", json=_page(slug="A B")).json()
        assert body["valid"] is False
        assert body["errors"]

    def test_catalog(self, client):
        body = client.get("/layout-builder/catalog", params={"q": "speak"}).json()
        assert [m["id"] for m in body["modules"]] == ["speakers"]
        assert "Events" in body["categories"]


class TestPages:
    def test_creation_lecture_mise_a_jour(self, client):
        r = client.post("/layout-builder/pages", json=_page())
        assert r.status_code == 201
        page_id = r.json()["id"]
        assert len(r.json()["sections"]) == 2

        r = client.put(f"/layout-builder/pages/{page_id}", json=_page(title="About us", sections=[]))
        assert r.status_code == 200
        assert r.json()["title"] == "About us"

        r = client.get(f"/layout-builder/pages/{page_id}")
        assert r.json()["title"] == "About us"
        assert r.json()["sections"] == []

    def test_creation_invalide(self, client, store):
        r = client.post("/layout-builder/pages", json=_page(title=""))
        assert r.status_code == 422
        assert store.list_pages() == []

    def test_slug_deja_utilise(self, client):
        client.post("/layout-builder/pages", json=_page())
        r = client.post("/layout-builder/pages", json=_page())
        assert r.status_code == 422

    def test_page_absente(self, client):
        assert client.get("/layout-builder/pages/404").status_code == 404

    def test_liste(self, client):
        client.post("/layout-builder/pages", json=_page())
        client.post("/layout-builder/pages", json=_page(slug="contact", page_type="contact"))
        assert [p["slug"] for p in client.get("/layout-builder/pages").json()] == ["about", "contact"]
        assert [p["slug"] for p in client.get("/layout-builder/pages", params={"page_type": "contact"}).json()] == ["contact"]


class TestRender:
    def test_page_publiee(self, client):
        client.post("/layout-builder/pages", json=_page(status="published"))
        r = client.get("/layout-builder/render/about")
        assert r.status_code == 200
        assert "<title>About</title>" in r.text

    def test_brouillon_invisible(self, client):
        client.post("/layout-builder/pages", json=_page())
        assert client.get("/layout-builder/render/about").status_code == 404

    def test_slug_inconnu(self, client):
        assert client.get("/layout-builder/render/nope").status_code == 404


def test_create_app_health():
    from layout_builder.app import create_app
    client = TestClient(create_app())
    assert client.get("/health").json() == {"status": "ok"}
    assert any(r.path == "/layout-builder/catalog" for r in client.app.routes)
