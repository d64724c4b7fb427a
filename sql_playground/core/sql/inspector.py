from typing import Any, Dict, List, Optional

from sql_playground.core import schemas
from sql_playground.core.database import Database


def normalize_type(raw_type: Optional[str]) -> str:
    """VARCHAR(255) -> VARCHAR, integer -> INTEGER. Columns without a declared type give ''."""
    return (raw_type or "").upper().split("(")[0].strip()


def to_column(info: Dict[str, Any]) -> schemas.ColumnDescriptor:
    return schemas.ColumnDescriptor(
        name=info["name"].lower(),
        type=normalize_type(info["type"]),
        # pk is the 1-based position inside the primary key, 0 when not part of it
        primary_key=bool(info["pk"]),
    )


async def get_columns(db: Database, table_name: str) -> List[schemas.ColumnDescriptor]:
    info = await db.all(f"PRAGMA table_info({table_name})")
    return [to_column(col) for col in info]


async def snapshot(db: Database, table_name: Optional[str]) -> schemas.TableSnapshot:
    """
    Read the full contents and the columns of one table.

    No table name means nothing to look at, so the empty snapshot comes back
    without touching the engine. A missing table raises EngineError; callers
    decide whether that is fatal.
    """
    if not table_name:
        return schemas.TableSnapshot.empty()

    rows = await db.all(f"SELECT * FROM {table_name}")
    columns = await get_columns(db, table_name)
    return schemas.TableSnapshot(rows=rows, columns=columns)
