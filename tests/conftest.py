import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ideaboard import models  # noqa: F401
from ideaboard.config import settings
from ideaboard.database import Base, engine_options, get_db
from ideaboard.main import app

from helpers import register


@pytest.fixture(autouse=True)
def no_gemini_key(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")


@pytest_asyncio.fixture
async def engine(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'ideaboard-test.db'}"
    engine = create_async_engine(url, **engine_options(url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_client(session_factory):
    """Return a factory for clients that each keep their own cookie jar."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def factory(raise_app_exceptions: bool = True, base_url: str = "http://test") -> AsyncClient:
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        client = AsyncClient(transport=transport, base_url=base_url)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client):
    return make_client()


@pytest_asyncio.fixture
async def alice(make_client):
    """First registered user, and therefore the admin, logged in."""
    c = make_client()
    r = await register(c, "alice@example.com", firstName="Alice")
    assert r.status_code == 201
    return c


@pytest_asyncio.fixture
async def bob(make_client, alice):
    """A regular user registered after alice, logged in."""
    c = make_client()
    r = await register(c, "bob@example.com", firstName="Bob")
    assert r.status_code == 201
    return c
