from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product
from modules.users.models import Role, User


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def admin_user():
    return User.objects.create_user(
        "admin@example.com", password="admin123", name="Admin", role=Role.ADMIN
    )


@pytest.fixture()
def client_user():
    return User.objects.create_user(
        "client@example.com", password="client123", name="Client", role=Role.CLIENT
    )


@pytest.fixture()
def other_client():
    return User.objects.create_user(
        "other@example.com", password="other123", name="Other", role=Role.CLIENT
    )


@pytest.fixture()
def admin_api(admin_user):
    """APIClient force-authenticated as ADMIN."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture()
def client_api(client_user):
    """APIClient force-authenticated as the owning CLIENT."""
    client = APIClient()
    client.force_authenticate(user=client_user)
    return client


@pytest.fixture()
def other_client_api(other_client):
    client = APIClient()
    client.force_authenticate(user=other_client)
    return client


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


@pytest.fixture()
def product_factory():
    """Create products with unique lot codes."""
    counter = {"n": 0}

    def _make(name="Widget", price="10.00", stock=10, is_active=True, **extra):
        counter["n"] += 1
        return Product.objects.create(
            lot_code=extra.pop("lot_code", f"TEST-{counter['n']:04d}"),
            name=name,
            price=Decimal(price),
            stock=stock,
            is_active=is_active,
            **extra,
        )

    return _make
