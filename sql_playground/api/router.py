from fastapi import APIRouter
from sql_playground.api.endpoints import auth, schema, sql

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(auth.router)
api_router.include_router(sql.router)
api_router.include_router(schema.router)
