import pytest
from fastapi.testclient import TestClient

import storefront.config as config_mod
from storefront.catalog import Catalog, catalog as shared_catalog
from storefront.main import app
from storefront.seed_menu import build_demo_backup
from storefront.services.cart import Cart
from storefront.services.session import clear_cache

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


@pytest.fixture
def catalog():
    """A fresh catalog holding the demo menu, independent of the app's catalog."""
    return Catalog(build_demo_backup())


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def client(monkeypatch):
    """Shared FastAPI TestClient over the demo catalog.

    The app's catalog is reloaded from the demo backup before and after each
    test so admin mutations never leak between tests. Sets up test admin
    credentials for authentication.
    """
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)

    shared_catalog.load(build_demo_backup())

    # Clear session cache before each test
    clear_cache()

    with TestClient(app) as test_client:
        yield test_client

    clear_cache()
    shared_catalog.load(build_demo_backup())


@pytest.fixture
def admin_auth():
    """Return HTTP Basic Auth credentials tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def session_id(client):
    """A storefront session created through the API."""
    resp = client.post("/sessions")
    assert resp.status_code == 201
    return resp.json()["sessionId"]
