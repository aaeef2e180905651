"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from database import build_engine, build_session_maker, init_models
from main import create_app
from store import LinkStore


@pytest.fixture
async def engine(tmp_path):
    """File-backed SQLite database, fresh for every test."""
    engine = build_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'links.db'}",
        pool_size=25,
        max_overflow=0,
        pool_timeout=30,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine):
    return LinkStore(build_session_maker(engine))


@pytest.fixture
def app(engine):
    return create_app(engine=engine)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
