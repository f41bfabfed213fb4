"""Shared test fixtures for akwaaba-api."""

from __future__ import annotations

from collections import defaultdict
from contextlib import ExitStack, contextmanager
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from akwaaba_shared.constants import Role

CHAIN_METHODS = (
    "select", "eq", "neq", "gt", "gte", "lt", "lte", "ilike", "in_", "or_", "is_",
    "order", "limit", "range", "insert", "update", "upsert", "delete",
)

# Every module that binds get_supabase_client at import time.
SUPABASE_MODULES = (
    "akwaaba_api.middleware.auth",
    "akwaaba_api.services.activity_service",
    "akwaaba_api.services.admin_service",
    "akwaaba_api.services.agent_service",
    "akwaaba_api.services.analytics_service",
    "akwaaba_api.services.config_service",
    "akwaaba_api.services.inquiry_service",
    "akwaaba_api.services.profile_service",
    "akwaaba_api.services.property_service",
    "akwaaba_api.services.storage_service",
)


def make_chain(data=None, count=0):
    """Create a chainable mock that returns given data on execute()."""
    chain = MagicMock()
    chain.execute.return_value = MagicMock(data=data or [], count=count)
    for method in CHAIN_METHODS:
        getattr(chain, method).return_value = chain
    return chain


def make_supabase(table_data=None, errors=None):
    """Create a mock Supabase client.

    table_data: optional dict mapping table name -> (data, count), or to a
    list of (data, count) tuples handed out one per table() call (the last
    one repeats). All unmapped tables return empty results.

    Every chain handed out is recorded in `client.calls[table_name]` so tests
    can inspect insert/update payloads. `errors` maps a table name to an
    exception raised by every execute() on that table.
    """
    client = MagicMock()
    td = table_data or {}
    client.calls = defaultdict(list)

    def _table(name):
        entry = td.get(name, ([], 0))
        if isinstance(entry, list):
            idx = min(len(client.calls[name]), len(entry) - 1)
            data, count = entry[idx]
        else:
            data, count = entry
        chain = make_chain(data, count)
        if errors and name in errors:
            chain.execute.side_effect = errors[name]
        client.calls[name].append(chain)
        return chain

    client.table.side_effect = _table

    bucket = MagicMock()
    bucket.get_public_url.side_effect = lambda path: f"https://storage.test/{path}"
    client.storage.from_.return_value = bucket
    return client


@contextmanager
def use_supabase(mock):
    """Patch get_supabase_client in every module that imported it."""
    with ExitStack() as stack:
        for module in SUPABASE_MODULES:
            stack.enter_context(patch(f"{module}.get_supabase_client", return_value=mock))
        yield mock


def payloads(mock, table, method):
    """First positional argument of every `method` call made against `table`."""
    return [
        call.args[0]
        for chain in mock.calls[table]
        for call in getattr(chain, method).call_args_list
    ]


@pytest.fixture(autouse=True)
def _clear_caches():
    """Clear all in-memory caches between tests."""
    from akwaaba_api.utils.cache import ALL_CACHES
    yield
    for cache in ALL_CACHES:
        cache.clear()


@pytest.fixture()
def _supabase_patch():
    """Patch get_supabase_client everywhere it's imported."""
    with use_supabase(make_supabase()) as mock:
        yield mock


@pytest.fixture()
def app(_supabase_patch):
    """Create test FastAPI app with mocked Supabase."""
    from akwaaba_api.app import create_app
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    """HTTP test client."""
    return TestClient(app, raise_server_exceptions=False)


def make_user(role=Role.CUSTOMER, *, verified=True, user_id=None):
    from akwaaba_api.middleware.auth import AuthUser
    return AuthUser(
        user_id=user_id or str(uuid4()),
        role=role,
        email=f"{role.value}@example.com",
        profile_id=str(uuid4()),
        full_name=f"Test {role.value.title()}",
        verification_status="verified" if verified else "pending",
        is_verified=verified,
    )


@pytest.fixture()
def login_as(app):
    """Return a function that makes the given AuthUser the caller of every request."""
    from akwaaba_api.middleware.auth import get_current_user

    def _login(user):
        async def _current_user():
            return user
        app.dependency_overrides[get_current_user] = _current_user
        return user

    return _login


@pytest.fixture()
def admin_user():
    return make_user(Role.ADMIN)


@pytest.fixture()
def agent_user():
    return make_user(Role.AGENT)


@pytest.fixture()
def customer_user():
    return make_user(Role.CUSTOMER)


@pytest.fixture()
def sample_agent():
    return {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "email": "kwame.mensah@example.com",
        "full_name": "Kwame Mensah",
        "phone": "+233201234567",
        "company_name": "Mensah Realty",
        "license_number": "GH-REA-20931",
        "specializations": ["residential"],
        "experience_years": 6,
        "bio": "Accra-based agent focused on East Legon and Cantonments.",
        "user_role": "agent",
        "verification_status": "pending",
        "is_verified": False,
        "admin_notes": None,
        "verified_by": None,
    }


@pytest.fixture()
def sample_property():
    return {
        "id": str(uuid4()),
        "seller_id": str(uuid4()),
        "title": "Three bedroom house in East Legon",
        "description": "Detached family home with a garden, boys quarters and a two-car garage.",
        "property_type": "house",
        "listing_type": "sale",
        "price": 450000.0,
        "currency": "GHS",
        "address": "12 Lagos Avenue, East Legon",
        "city": "Accra",
        "region": "Greater Accra",
        "bedrooms": 3,
        "bathrooms": 2,
        "features": ["garden"],
        "amenities": ["parking"],
        "is_featured": False,
        "views_count": 4,
        "status": "active",
        "approval_status": "approved",
        "property_images": [],
    }


@pytest.fixture()
def listing_body():
    return {
        "title": "Modern apartment in Airport Residential",
        "description": "Two bedroom serviced apartment close to the airport and the mall.",
        "property_type": "apartment",
        "listing_type": "rent",
        "price": 2500,
        "address": "7 Airport Residential Road, Accra",
        "city": "Accra",
        "region": "Greater Accra",
        "bedrooms": 2,
        "bathrooms": 2,
        "features": ["balcony"],
        "amenities": ["pool", "gym"],
    }
