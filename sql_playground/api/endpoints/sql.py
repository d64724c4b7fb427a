from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sql_playground.core import schemas
from sql_playground.core.database import Database, get_db
from sql_playground.core.sql import executor

router = APIRouter(prefix="/api", tags=["SQL"])

db_dep = Annotated[Database, Depends(get_db)]


@router.post("/execute-sql")
async def execute_sql(payload: schemas.ExecuteSQLRequest, db: db_dep):
    """
    Run one SQL statement.

    SELECT answers with {type: "query", data}. Anything else answers with
    {type: "dual_query", previousData, updatedData} for the table it touched.
    Failures answer with {type: "error", message} and a 400/500 status.
    """
    result = await executor.execute_statement(db, payload.query)

    status_code = 200
    if isinstance(result, schemas.ErrorResult):
        status_code = result.status_code

    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", by_alias=True),
    )
