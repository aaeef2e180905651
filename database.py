from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base
from config import DATABASE_URL_ASYNC, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_POOL_RECYCLE, DB_ECHO

Base = declarative_base()


def build_engine(url: str = DATABASE_URL_ASYNC, **kwargs) -> AsyncEngine:
    """Create the engine that owns the connection pool.

    Waits for a free connection are bounded by ``pool_timeout``; stale
    connections are detected with ``pool_pre_ping`` before being handed out.
    """
    options = dict(
        echo=DB_ECHO,
        pool_pre_ping=True,
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        pool_timeout=DB_POOL_TIMEOUT,
        pool_recycle=DB_POOL_RECYCLE,
    )
    options.update(kwargs)
    return create_async_engine(url, **options)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine):
    import models  # noqa: F401  registers the links table on Base.metadata
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_store(request: Request):
    return request.app.state.store
