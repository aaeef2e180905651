import logging
from contextlib import asynccontextmanager
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from errors import CodeTaken, LinkNotFound, StoreUnavailable
from models import Link, click_timestamp, utcnow

logger = logging.getLogger(__name__)


class LinkStore:
    """Persistence for links; the only code path that writes the links table.

    Every operation runs in its own session and transaction, so one store can
    be shared by all concurrent requests. Database failures other than a
    duplicate code are reported as :class:`StoreUnavailable`.
    """

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    @asynccontextmanager
    async def _session(self):
        try:
            async with self.session_maker() as session:
                yield session
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Link store failure: %s", e)
            raise StoreUnavailable() from e

    async def create(self, code: str, url: str) -> Link:
        link = Link(code=code, url=url, clicks=0, last_clicked=None, created_at=utcnow())
        try:
            async with self._session() as session:
                async with session.begin():
                    session.add(link)
        except IntegrityError as e:
            logger.warning("Code already taken: %s", code)
            raise CodeTaken(code) from e
        logger.info("Link created: %s -> %s", code, url)
        return link

    async def get_by_code(self, code: str) -> Link:
        async with self._session() as session:
            link = await self._fetch(session, code)
        if link is None:
            raise LinkNotFound(code)
        return link

    async def code_exists(self, code: str) -> bool:
        async with self._session() as session:
            stmt = select(Link.id).filter(Link.code == code)
            result = await session.execute(stmt)
            return result.first() is not None

    async def list_all(self) -> List[Link]:
        async with self._session() as session:
            stmt = select(Link).order_by(Link.created_at.desc(), Link.id.desc())
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def delete_by_code(self, code: str) -> None:
        async with self._session() as session:
            async with session.begin():
                stmt = delete(Link).where(Link.code == code).execution_options(synchronize_session=False)
                result = await session.execute(stmt)
                deleted = result.rowcount
        if deleted == 0:
            raise LinkNotFound(code)
        logger.info("Link deleted: %s", code)

    async def record_click_and_fetch(self, code: str) -> Link:
        """Count one visit to ``code`` and return the link.

        The increment and the read happen in a single UPDATE ... RETURNING, so
        concurrent visits never lose a click, and a link deleted before the
        update is simply not matched.
        """
        stmt = (
            update(Link)
            .where(Link.code == code)
            .values(clicks=Link.clicks + 1, last_clicked=click_timestamp())
            .returning(Link)
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            async with session.begin():
                result = await session.execute(stmt)
                link = result.scalar_one_or_none()
        if link is None:
            raise LinkNotFound(code)
        return link

    @staticmethod
    async def _fetch(session: AsyncSession, code: str):
        stmt = select(Link).filter(Link.code == code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
