from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.identity_verifier import FakeIdentityVerifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import AccessTokenSigner
from src.depends import (
    SessionSettings,
    get_access_token_signer,
    get_identity_verifier,
    get_session_settings,
    get_unit_of_work,
)
import src.domain.entities  # noqa: F401

TEST_SECRET = "test-secret-key"
REFRESH_TTL = timedelta(days=7)


@pytest.fixture
def signer():
    return AccessTokenSigner(TEST_SECRET, access_ttl=timedelta(minutes=15))


@pytest.fixture
def identity_verifier():
    return FakeIdentityVerifier()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test_sessions.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, signer, identity_verifier):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_access_token_signer] = lambda: signer
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_session_settings] = lambda: SessionSettings(
        refresh_ttl=REFRESH_TTL, cookie_secure=False
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
