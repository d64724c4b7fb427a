import asyncio
import logging
from typing import Dict, List, Optional

from sql_playground.core import schemas
from sql_playground.core.database import Database
from sql_playground.core.errors import EngineError
from sql_playground.core.sql import inspector

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# SCHEMA AGGREGATE
# Purpose: one summary of every user table (columns + row count) for the
# sidebar. Best effort: a table that cannot be inspected is left out.
# -----------------------------------------------------------------------------

LIST_TABLES_SQL = (
    "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
)


async def list_tables(db: Database) -> List[str]:
    """Names of all user tables. Raises EngineError if the catalog can't be read."""
    rows = await db.all(LIST_TABLES_SQL)
    return [row["name"] for row in rows]


async def count_rows(db: Database, table_name: str) -> int:
    count = await db.scalar(f"SELECT COUNT(*) AS count FROM {table_name}")
    return count or 0


async def summarize_table(
    db: Database, table_name: str
) -> Optional[schemas.TableSummary]:
    """
    Fetch columns and row count side by side.

    Returns None when either fetch fails so the caller can drop the table.
    """
    columns, rows = await asyncio.gather(
        inspector.get_columns(db, table_name),
        count_rows(db, table_name),
        return_exceptions=True,
    )

    for outcome in (columns, rows):
        if isinstance(outcome, EngineError):
            logger.warning(f"Skipping table '{table_name}': {outcome.message}")
            return None
        if isinstance(outcome, BaseException):
            raise outcome

    return schemas.TableSummary(columns=columns, rows=rows)


async def get_full_schema(db: Database) -> Dict[str, schemas.TableSummary]:
    """
    Summarize every user table.

    Example:
        {
            "students": {"columns": [{"name": "id", "type": "INTEGER", "pk": true}], "rows": 3},
            "courses": {"columns": [...], "rows": 0}
        }
    """
    tables = await list_tables(db)
    if not tables:
        return {}

    summaries = await asyncio.gather(
        *(summarize_table(db, table_name) for table_name in tables)
    )

    return {
        table_name: summary
        for table_name, summary in zip(tables, summaries)
        if summary is not None
    }
