import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from config import LOG_LEVEL
from database import build_engine, build_session_maker, init_models
from errors import LinkError
from routers import links
from store import LinkStore

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def link_error_handler(request: Request, exc: LinkError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def attach_store(app: FastAPI, engine: AsyncEngine) -> LinkStore:
    app.state.engine = engine
    app.state.store = LinkStore(build_session_maker(engine))
    return app.state.store


def create_app(engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Build the application.

    The engine (and with it the connection pool) is created at startup unless
    one is passed in, and disposed at shutdown.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "engine", None) is None:
            attach_store(app, build_engine())
        await init_models(app.state.engine)
        logger.info("Link store ready")
        yield
        await app.state.engine.dispose()
        logger.info("Connection pool drained")

    app = FastAPI(
        lifespan=lifespan,
        title="TinyLink",
        version="1.0.0",
        description="API for URL shortening service",
    )
    app.include_router(links.router, tags=["links"])
    app.include_router(links.redirect_router, tags=["redirect"])
    app.add_exception_handler(LinkError, link_error_handler)

    if engine is not None:
        attach_store(app, engine)

    return app


app = create_app()
