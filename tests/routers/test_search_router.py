from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import dependencies as deps
from app.routers import search
from app.settings import Settings
from tests.conftest import make_service, post_file

FILES = {
    "vite.md": post_file(
        title="React and Vite", date="2024-11-29", tags=["React"], body="quantum bundling"
    ),
    "rust.md": post_file(title="Rust", date="2024-10-01", tags=["rust"]),
}


def make_client(current_settings=None):
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: make_service(FILES)
    app.dependency_overrides[deps.get_settings] = lambda: current_settings or Settings()
    app.include_router(search.router)
    return TestClient(app)


def test_search_without_query_returns_everything():
    res = make_client().get("/search")

    assert res.status_code == 200
    body = res.json()
    assert body["query"] == ""
    assert [p["id"] for p in body["results"]] == ["vite", "rust"]
    assert body["easterEgg"]["found"] is False


def test_search_filters_posts():
    body = make_client().get("/search", params={"q": "RUST"}).json()

    assert [p["id"] for p in body["results"]] == ["rust"]


def test_search_reports_easter_egg_alongside_results():
    body = make_client().get("/search", params={"q": "quantum"}).json()

    assert body["easterEgg"]["found"] is True
    assert body["easterEgg"]["key"] == "quantum"
    assert body["easterEgg"]["style"]["fontFamily"] == "monospace"
    assert body["results"] == []


def test_search_body_when_enabled():
    client = make_client(Settings(SEARCH_INCLUDE_BODY=True))

    body = client.get("/search", params={"q": "quantum"}).json()

    assert [p["id"] for p in body["results"]] == ["vite"]
    assert body["easterEgg"]["key"] == "quantum"


def test_search_rejects_overlong_query():
    res = make_client().get("/search", params={"q": "x" * 201})

    assert res.status_code == 422
