import logging
from typing import Annotated, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from sql_playground.core import schemas
from sql_playground.core.database import Database, get_db
from sql_playground.core.errors import EngineError
from sql_playground.core.sql import aggregate

router = APIRouter(prefix="/api", tags=["Schema"])

db_dep = Annotated[Database, Depends(get_db)]


@router.get("/schema", response_model=Dict[str, schemas.TableSummary])
async def get_schema(db: db_dep):
    """Return columns and row counts for every user table, keyed by table name."""
    try:
        return await aggregate.get_full_schema(db)
    except EngineError as error:
        logging.error(f"Failed to list tables: {error.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=schemas.ErrorResponse.model_validate(error).model_dump(),
        )
