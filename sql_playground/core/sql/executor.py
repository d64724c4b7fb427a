import logging
from typing import Optional

from sql_playground.core import schemas
from sql_playground.core.database import Database
from sql_playground.core.errors import EmptyStatementError, EngineError
from sql_playground.core.sql import inspector
from sql_playground.core.sql.classifier import Statement, classify

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# EXECUTION ORCHESTRATOR
# Purpose: run one user statement and describe what it did.
# Reads return their rows. Mutations return the target table before and after.
# The before/execute/after sequence is not wrapped in a transaction, so a
# concurrent writer can show up in either snapshot.
# -----------------------------------------------------------------------------

SUCCESS_MESSAGES = {
    "CREATE": "Table '{table}' created successfully.",
    "DROP": "Table '{table}' dropped successfully.",
    "ALTER": "Table '{table}' altered successfully.",
}


def sql_error(error: EngineError) -> schemas.ErrorResult:
    return schemas.ErrorResult(message=f"SQL ERROR: {error.message}", status_code=500)


def success_message(statement: Statement) -> str:
    for prefix, template in SUCCESS_MESSAGES.items():
        if statement.upper.startswith(prefix):
            return template.format(table=statement.table_name)
    return f"{statement.verb} executed successfully."


async def run_read(db: Database, statement: Statement) -> schemas.ExecutionResult:
    try:
        rows = await db.all(statement.text)
    except EngineError as error:
        logger.error(f"Read statement failed: {error.message}")
        return sql_error(error)

    return schemas.QueryResult(message=f"{len(rows)} rows retrieved.", data=rows)


async def capture_before(
    db: Database, statement: Statement
) -> schemas.TableSnapshot:
    """
    Snapshot the target table ahead of a mutation.

    Only a missing table for something other than CREATE TABLE is fatal;
    every other failure leaves the "before" side empty.
    """
    try:
        return await inspector.snapshot(db, statement.table_name)
    except EngineError as error:
        if error.is_missing_table and not statement.is_table_creation:
            raise
        logger.info(f"No previous state for '{statement.table_name}': {error.message}")
        return schemas.TableSnapshot.empty()


async def capture_after(
    db: Database, statement: Statement
) -> schemas.TableSnapshot:
    # DROP TABLE (or a mis-guessed table name) leaves nothing to read back
    try:
        return await inspector.snapshot(db, statement.table_name)
    except EngineError as error:
        logger.warning(f"No updated state for '{statement.table_name}': {error.message}")
        return schemas.TableSnapshot.empty()


async def run_mutation(db: Database, statement: Statement) -> schemas.ExecutionResult:
    try:
        previous_data = await capture_before(db, statement)
        affected_rows = await db.run(statement.text)
    except EngineError as error:
        logger.error(f"Mutation failed: {error.message}")
        return sql_error(error)

    logger.info(f"{statement.verb} affected {affected_rows} row(s)")
    updated_data = await capture_after(db, statement)

    return schemas.DualQueryResult(
        message=success_message(statement),
        previous_data=previous_data,
        updated_data=updated_data,
    )


async def execute_statement(
    db: Database, sql: Optional[str]
) -> schemas.ExecutionResult:
    """
    Classify and run one SQL statement.

    Never raises for user mistakes: an empty statement gives a 400 error result
    and engine failures give a 500 error result prefixed with "SQL ERROR: ".
    """
    try:
        statement = classify(sql)
    except EmptyStatementError as error:
        return schemas.ErrorResult(message=error.message, status_code=error.status_code)

    if statement.is_read:
        return await run_read(db, statement)
    return await run_mutation(db, statement)
