import pytest
from fastapi.testclient import TestClient

from invoice_discount.main import app
from invoice_discount.services.sessions import SessionStore, get_store


@pytest.fixture()
def store():
    return SessionStore()


@pytest.fixture()
def client(store):
    def override_get_store():
        return store

    app.dependency_overrides[get_store] = override_get_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
