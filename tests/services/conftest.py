"""Route test fixtures — async primary + Domani DBs and a FastAPI test client.

Invariants:
    - Every test gets fresh in-memory SQLite databases (primary and Domani)
    - get_db / get_domani_db overridden to use the test sessions
    - db_manager / domani_manager patched for the readiness probe
    - outbox records every notification instead of sending it

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Notifications patched at the services.notifications boundary: routes and
      services run unmodified, only the outbound edge is replaced
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from pvs_api.db.base import Base, DomaniBase
from pvs_api.core.errors import ExternalServiceError
from pvs_api.infrastructure.database import (
    DatabaseSessionManager, get_db, get_domani_db,
)
import pvs_api.infrastructure.database as db_module
import pvs_api.models  # noqa: F401
from pvs_api.models.app import App
from pvs_api.models.client import Client
from pvs_api.models.website import Website
from pvs_api.main import app


async def _engine_for(metadata):
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


def _fake_manager(engine, factory, name):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.name = name
    manager.engine = engine
    manager._session_factory = factory
    return manager


@pytest.fixture
async def test_engine():
    engine = await _engine_for(Base.metadata)
    yield engine
    await engine.dispose()


@pytest.fixture
async def domani_engine():
    engine = await _engine_for(DomaniBase.metadata)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def domani_session_factory(domani_engine):
    return async_sessionmaker(
        domani_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def domani_db(domani_session_factory):
    async with domani_session_factory() as session:
        yield session


@pytest.fixture
async def client(
    test_engine, test_session_factory, domani_engine, domani_session_factory,
):
    """FastAPI test client with both DB dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_get_domani_db():
        async with domani_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_domani_db] = override_get_domani_db

    original = (db_module.db_manager, db_module.domani_manager)
    db_module.db_manager = _fake_manager(test_engine, test_session_factory, "primary")
    db_module.domani_manager = _fake_manager(
        domani_engine, domani_session_factory, "domani",
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager, db_module.domani_manager = original


@pytest.fixture
def outbox(monkeypatch):
    """Replace every outbound notification with a recorder.

    Returns a dict keyed by notification name, each a list of call kwargs.
    Set outbox["fail"] to a set of names that should raise instead.
    """
    calls: dict = {"fail": set()}

    def _recorder(name):
        calls[name] = []

        async def _record(*args, **kwargs):
            if name in calls["fail"]:
                raise ExternalServiceError(
                    "test", f"{name} unavailable", http_status=500,
                )
            calls[name].append({"args": args, **kwargs})
            return True

        monkeypatch.setattr(f"pvs_api.services.notifications.{name}", _record)

    for name in (
        "notify_lead", "alert_audit_request", "send_audit_request_email",
        "send_contact_submission_email", "send_deployment_email",
        "send_intro_meeting_email", "send_password_reset_email",
    ):
        _recorder(name)
    return calls


# ─── Seed rows ──────────────────────────────────────────────────

@pytest.fixture
async def seed_client(test_db):
    row = Client(
        client="Acme Bakery", client_slug="acme-bakery", active=True,
        firstname="Ada", lastname="Baker", email="ada@acme.test",
    )
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)
    return row


@pytest.fixture
async def seed_website(test_db, seed_client):
    row = Website(
        client_id=seed_client.id, title="Acme Bakery", domain="acmebakery.test",
        website_slug="acme-bakery", contact_email="owner@acme.test",
    )
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)
    return row


@pytest.fixture
async def seed_app(test_db, seed_client):
    row = App(client_id=seed_client.id, name="Acme Orders", app_slug="acme-orders")
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)
    return row
