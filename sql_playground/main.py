import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from sql_playground.core.config import settings
from sql_playground.core.database import database
from sql_playground.core.errors import EngineError
from sql_playground.api.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Close the engine once everything is done
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Touch the database so a bad DATABASE_URL shows up at startup
    try:
        await database.scalar("SELECT 1")
        logger.info(f"Connected to SQLite database: {settings.DATABASE_URL}")
    except EngineError as e:
        logger.error(f"DB connection error: {e.message}")

    yield
    await database.dispose()


app = FastAPI(title="SQL Playground API", lifespan=lifespan)

# Include the master router containing all our endpoints
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the SQL Playground API"}
