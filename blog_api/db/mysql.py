import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from blog_api.errors import DataAccessError
from blog_api.settings import Settings

logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]


def build_statement(sql: str, params: Params = None):
    """
    Wrap raw SQL in a text() clause. List and tuple values are bound as
    expanding parameters so ``IN :ids`` never needs string formatting.
    """
    stmt = text(sql)
    expanding = [
        bindparam(name, expanding=True)
        for name, value in (params or {}).items()
        if isinstance(value, (list, tuple))
    ]
    if expanding:
        stmt = stmt.bindparams(*expanding)
    return stmt


class Database:
    """Thin async query runner over a bounded SQLAlchemy connection pool."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def query(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(build_statement(sql, params), dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}\nSQL: {sql}")
            raise DataAccessError(str(getattr(e, "orig", None) or e)) from e

    async def execute(self, sql: str, params: Params = None) -> int:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(build_statement(sql, params), dict(params or {}))
                return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Statement failed: {e}\nSQL: {sql}")
            raise DataAccessError(str(getattr(e, "orig", None) or e)) from e

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database(settings: Settings) -> Database:
    engine = create_async_engine(
        settings.mysql_url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_pre_ping=True,
    )
    return Database(engine)
