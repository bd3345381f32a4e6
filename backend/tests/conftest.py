import pytest
from fastapi.testclient import TestClient

from pressurewash.dependencies import get_repository
from pressurewash.main import app
from pressurewash.repository import JsonFileQuoteStore, QuoteRepository


@pytest.fixture
def quotes_path(tmp_path):
    return tmp_path / "data" / "quotes.json"


@pytest.fixture
def repo(quotes_path):
    return QuoteRepository(JsonFileQuoteStore(quotes_path))


@pytest.fixture
def client(repo):
    """TestClient whose quote endpoints write to a per-test JSON file."""
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_body():
    return {
        "address": "12 Elm St, Fort Wayne",
        "name": "Pat Doe",
        "phone": "(260) 555-1234",
        "service": "Driveway",
        "size": "Medium",
        "condition": "Light",
    }
