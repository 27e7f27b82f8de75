"""Shared fixtures: in-memory sqlite database, i18n connector, admin client."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from catlingo.categories.services import create_category_set
from catlingo.config import Settings
from catlingo.connectors import I18nConnector, deactivate_connector
from catlingo.db.engine import get_session
from catlingo.db.models import Base, Category, CategorySet, Locale
from catlingo.hooks import clear_global_registry
from catlingo.i18n import setup
from catlingo.plugins import PluginRegistry


def make_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(autouse=True)
def clean_hooks() -> Iterator[None]:
    """Every test starts without installed hooks or translatable categories."""
    clear_global_registry()
    yield
    deactivate_connector()
    clear_global_registry()
    Category.__translatable__ = False
    Category.__translatable_fields__ = ()


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = make_engine()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Iterator[Session]:
    session = Session(engine, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test")


@pytest.fixture
def i18n_plugins() -> PluginRegistry:
    """Extension table with the i18n extension registered."""
    registry = PluginRegistry()
    setup(registry)
    return registry


@pytest.fixture
def i18n_connector(
    engine: Engine, i18n_plugins: PluginRegistry, test_settings: Settings
) -> Iterator[I18nConnector]:
    connector = I18nConnector(bind=engine, plugins=i18n_plugins, settings=test_settings)
    connector.activate()
    yield connector
    connector.deactivate()


@pytest.fixture
def locales(db_session: Session) -> list[Locale]:
    records = [
        Locale(iso_code="en", native_name="English"),
        Locale(iso_code="es", native_name="Español"),
        Locale(iso_code="ca", native_name="Català"),
        Locale(iso_code="fr", native_name="Français", is_active=False),
    ]
    db_session.add_all(records)
    db_session.commit()
    return records


@pytest.fixture
def category_set(db_session: Session) -> CategorySet:
    category_set = create_category_set(db_session, "tags", "Tags")
    db_session.commit()
    return category_set


def add_category(
    session: Session,
    category_set: CategorySet,
    name: str,
    locale: str | None,
    *,
    content_id: int | None = None,
    description: str | None = None,
) -> Category:
    """Store one category variant."""
    category = Category(
        name=name,
        locale=locale,
        content_id=content_id,
        description=description,
        category_set=category_set,
    )
    session.add(category)
    session.flush()
    return category


@pytest.fixture
def client(db_session: Session) -> Iterator[TestClient]:
    """Admin API client sharing the test session."""
    from catlingo.admin.main import app

    def override_session() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
