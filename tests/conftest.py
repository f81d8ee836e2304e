"""
Pytest configuration and fixtures.
Environment variables are set before the app is imported so the cached
settings and the module-level engine pick them up.
"""
import os

os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "DEV"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from waasha.config import get_settings
from waasha.database import create_db_and_tables, get_session
from waasha.main import app
from waasha.models.user import AccountKind
from waasha.services.accounts import AccountService
from waasha.services.catalog import DEFAULT_CATALOG
from waasha.services.listings import ServiceListingService
from waasha.services.providers import ProviderProfileService


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def account_service(session, settings):
    return AccountService(session, settings)


@pytest.fixture
def provider_service(session):
    return ProviderProfileService(session, DEFAULT_CATALOG)


@pytest.fixture
def listing_service(session):
    return ServiceListingService(session, DEFAULT_CATALOG)


@pytest.fixture
def provider_account(account_service):
    """A registered provider account without a profile."""
    return account_service.register(
        username="Ama Mensah",
        email="ama@example.com",
        password="secret123",
        phone_number="0244123456",
        account_kind=AccountKind.PROVIDER,
    ).account


@pytest.fixture
def client_account(account_service):
    return account_service.register(
        username="kofi",
        email="kofi@example.com",
        password="secret123",
    ).account


@pytest.fixture
def client(engine):
    """TestClient whose requests use the per-test database."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Registers through the API; keyword arguments override the default body."""

    def _register(**overrides):
        body = {
            "username": "alice",
            "email": "alice@x.com",
            "password": "secret1",
        }
        body.update(overrides)
        return client.post("/register", json=body)

    return _register
