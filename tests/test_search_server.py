import pytest

from business_finder.core.config import Settings
from business_finder.core.search import BusinessSearchService
from business_finder.jobs import search_server
from business_finder.models import ProviderPage


class FakeProvider:
    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def __call__(self, params):
        self.calls.append(params)
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def use_provider(monkeypatch):
    def _install(pages, api_key="test-key"):
        provider = FakeProvider(pages)
        monkeypatch.setattr(
            search_server,
            "_build_service",
            lambda: BusinessSearchService(api_key=api_key, fetch_page=provider),
        )
        return provider

    return _install


@pytest.fixture
def client():
    return search_server.app.test_client()


def test_health_endpoint(monkeypatch, client):
    monkeypatch.setattr(search_server, "get_settings", lambda: Settings(serpapi_api_key=""))
    response = client.get("/healthz")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["serpapi_configured"] is False


def test_extract_requires_keyword(use_provider, client):
    provider = use_provider([])
    response = client.post("/api/extract", json={})
    assert response.status_code == 400
    assert response.get_json()["kind"] == "invalid_input"
    assert provider.calls == []


def test_extract_missing_key(use_provider, client):
    use_provider([], api_key="")
    response = client.post("/api/extract", json={"keyword": "movers"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "API key not configured"


def test_extract_not_found(use_provider, client):
    use_provider([ProviderPage()])
    response = client.post("/api/extract", json={"keyword": "movers", "country": "il"})
    assert response.status_code == 404
    assert response.get_json()["kind"] == "not_found"


def test_extract_provider_error_includes_detail(use_provider, client):
    use_provider([RuntimeError("Invalid API key.")])
    response = client.post("/api/extract", json={"keyword": "movers"})
    assert response.status_code == 500
    body = response.get_json()
    assert body["kind"] == "provider_error"
    assert body["message"] == "Invalid API key."


def test_extract_success(use_provider, client):
    use_provider(
        [
            ProviderPage(
                results=[
                    {"title": "A", "reviews": 3, "place_id": "pid", "description": "mail a@a.com"},
                    {"title": "B"},
                ]
            )
        ]
    )
    response = client.post("/api/extract", json={"keyword": "הובלות דירה", "country": "il"})

    assert response.status_code == 200
    businesses = response.get_json()["businesses"]
    assert [b["name"] for b in businesses] == ["A", "B"]
    assert businesses[0]["reviewCount"] == 3
    assert businesses[0]["placeId"] == "pid"
    assert businesses[0]["email"] == "a@a.com"
    assert businesses[1]["email"] is None


def test_extract_unexpected_error(monkeypatch, client):
    def broken():
        raise RuntimeError("kaboom")

    monkeypatch.setattr(search_server, "_build_service", broken)
    response = client.post("/api/extract", json={"keyword": "movers"})
    assert response.status_code == 500
    assert response.get_json()["error"] == search_server.INTERNAL_ERROR_MESSAGE


def test_export_csv(use_provider, client):
    use_provider([ProviderPage(results=[{"title": "A", "phone": "1"}])])
    response = client.post("/api/export", json={"keyword": "movers", "format": "csv"})

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "attachment; filename=businesses.csv" == response.headers["Content-Disposition"]
    assert response.get_data(as_text=True).split("\n")[1].startswith('"A","1"')


def test_export_json(use_provider, client):
    use_provider([ProviderPage(results=[{"title": "A"}])])
    response = client.post("/api/export", json={"keyword": "movers", "format": "json"})

    assert response.status_code == 200
    assert response.get_json() == [{"name": "A", "phone": "", "area": "", "rating": "", "email": ""}]


def test_export_rejects_unknown_format(use_provider, client):
    provider = use_provider([])
    response = client.post("/api/export", json={"keyword": "movers", "format": "xml"})
    assert response.status_code == 400
    assert provider.calls == []


@pytest.mark.parametrize("route", ["/api/extract", "/api/export"])
def test_non_object_body_is_invalid_input(use_provider, client, route):
    provider = use_provider([])
    response = client.post(route, json=["movers"])

    assert response.status_code == 400
    assert response.get_json()["kind"] == "invalid_input"
    assert provider.calls == []
