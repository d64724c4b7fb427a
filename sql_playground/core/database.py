import base64
from typing import Any, Dict, List

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sql_playground.core.config import settings
from sql_playground.core.errors import EngineError


def engine_message(error: SQLAlchemyError) -> str:
    # Keep the driver's own text ("no such table: foo"), not SQLAlchemy's wrapper
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


def to_json_value(value: Any) -> Any:
    # BLOBs are not guaranteed to be UTF-8, send them as base64 text
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


class Database:
    """
    Async facade over the embedded SQLite engine.

    Statements are sent to the driver untouched (exec_driver_sql), so user SQL
    containing colons or percent signs is never mistaken for bind parameters.
    Every SQLAlchemy failure leaves this class as an EngineError.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def all(self, sql: str) -> List[Dict[str, Any]]:
        """Run a row-returning statement and return every row as a dict."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.exec_driver_sql(sql)
                return [
                    {key: to_json_value(value) for key, value in row.items()}
                    for row in result.mappings().all()
                ]
        except SQLAlchemyError as error:
            raise EngineError(engine_message(error)) from error

    async def scalar(self, sql: str) -> Any:
        try:
            async with self.engine.connect() as conn:
                result = await conn.exec_driver_sql(sql)
                return result.scalar()
        except SQLAlchemyError as error:
            raise EngineError(engine_message(error)) from error

    async def run(self, sql: str) -> int:
        """Run a statement inside its own transaction, return the affected row count."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(sql)
                # sqlite reports -1 for DDL
                return max(result.rowcount or 0, 0)
        except SQLAlchemyError as error:
            raise EngineError(engine_message(error)) from error

    async def dispose(self):
        await self.engine.dispose()


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

database = Database(engine)


# This is the "Bridge" that gives my routes access to the database
async def get_db():
    return database
