import os

# Pas de Redis pendant les tests (lifespan)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.app import app as fastapi_app
from storefront.checkout.models import CheckoutSessionRequest
from storefront.checkout.service import CheckoutHandler
from storefront.checkout.settings import CheckoutSettings
from storefront.checkout.views import get_checkout_handler
from storefront.utils.security import require_user, require_staff, get_current_user

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

# Doubles du checkout: store (table projects) et passerelle de paiement
class FakeProjectStore:
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.rows = rows or []
        self.error = error
        self.calls: List[tuple] = []

    def fetch_projects(self, ids, authorization=None):
        self.calls.append((list(ids), authorization))
        if self.error:
            raise self.error
        return [r for r in self.rows if str(r.get("id")) in ids]

class FakeGateway:
    def __init__(self, url: str = "https://checkout.stripe.test/c/pay/cs_test_1", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.requests: List[CheckoutSessionRequest] = []

    def create_session(self, request: CheckoutSessionRequest):
        self.requests.append(request)
        if self.error:
            raise self.error
        return {"id": "cs_test_1", "url": self.url}

@pytest.fixture
def checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(
        supabase_url="https://proj.supabase.co",
        supabase_key="anon-key",
        stripe_secret_key="sk_test_123",
    )

@pytest.fixture
def project_rows() -> List[Dict[str, Any]]:
    return [
        {"id": "p1", "title": "Casa Térrea 3Q", "slug": "casa-terrea-3q", "code": "CT-01",
         "price": 650, "price_electrical": 180, "price_hydraulic": 0, "price_sanitary": None,
         "price_structural": 220.5},
        {"id": "p2", "title": "Sobrado Moderno", "slug": "sobrado-moderno", "code": None,
         "price": 1200.0},
    ]

@pytest.fixture
def fake_store(project_rows) -> FakeProjectStore:
    return FakeProjectStore(project_rows)

@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()

@pytest.fixture
def checkout_handler(checkout_settings, fake_store, fake_gateway) -> CheckoutHandler:
    return CheckoutHandler(checkout_settings, fake_store, fake_gateway)

@pytest.fixture
def checkout_client(app, client, checkout_handler):
    app.dependency_overrides[get_checkout_handler] = lambda: checkout_handler
    yield client
    app.dependency_overrides.pop(get_checkout_handler, None)

# Utilisateurs authentifiés (overrides des dépendances de sécurité)
@pytest.fixture
def customer_user() -> Dict[str, Any]:
    return {"id": "test-user", "email": "test@example.com", "role": "customer", "metadata": {}, "token": "fake-token"}

@pytest.fixture
def user_client(app, client, customer_user):
    app.dependency_overrides[require_user] = lambda: customer_user
    yield client
    app.dependency_overrides.pop(require_user, None)

@pytest.fixture
def staff_client(app, client):
    """Employé: lecture back-office, pas d'édition."""
    employee = {"id": "staff-1", "email": "staff@example.com", "role": "employee", "metadata": {}, "token": "t"}
    app.dependency_overrides[get_current_user] = lambda: employee
    yield client
    app.dependency_overrides.pop(get_current_user, None)

@pytest.fixture
def editor_client(app, client):
    """Sócio (partner): édition projets/styles."""
    partner = {"id": "partner-1", "email": "partner@example.com", "role": "partner", "metadata": {}, "token": "t"}
    app.dependency_overrides[get_current_user] = lambda: partner
    yield client
    app.dependency_overrides.pop(get_current_user, None)

# Mock database dependency for all tests
@pytest.fixture(scope="function", autouse=True)
def mock_db_dependency(monkeypatch):
    """
    Aucun test n'atteint Supabase: chaque repository reçoit un client MagicMock.
    Les tests qui ont besoin de réponses précises re-patchent leur module.
    """
    monkeypatch.setattr("storefront.infra.supabase_client.get_supabase", lambda: MagicMock())
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: MagicMock())
    for mod in ("projects", "leads", "styles", "auth"):
        monkeypatch.setattr(f"storefront.{mod}.repository.get_supabase", lambda: MagicMock())
    for mod in ("projects", "leads", "styles", "auth", "admin"):
        monkeypatch.setattr(f"storefront.{mod}.repository.get_service_supabase", lambda: MagicMock())
    monkeypatch.setattr("storefront.favorites.repository.get_user_supabase", lambda token: MagicMock())
    monkeypatch.setattr("storefront.health.service.get_supabase", lambda: MagicMock())

@pytest.fixture
def store_factory():
    return FakeProjectStore

@pytest.fixture
def gateway_factory():
    return FakeGateway
