import logging
from typing import Annotated, Any

import pydantic
from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse

from sql_playground.core import schemas
from sql_playground.core.errors import SessionStoreError
from sql_playground.core.security import (
    clear_session_cookie,
    session_dep,
    set_session_cookie,
    store_dep,
)

router = APIRouter(tags=["Authentication"])


INVALID_LOGIN = {"success": False, "message": "Invalid login data"}


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(
    response: Response,
    store: store_dep,
    payload: Annotated[Any, Body()] = None,
):
    # No body, a non-object body and missing fields all answer the same 400
    try:
        credentials = schemas.LoginRequest.model_validate(payload or {})
    except pydantic.ValidationError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=INVALID_LOGIN)

    if not credentials.name or not credentials.email:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=INVALID_LOGIN)

    user = schemas.SessionUser(name=credentials.name, email=credentials.email)
    session_id = await store.create({"user": user.model_dump()})
    set_session_cookie(response, session_id)
    return {"success": True, "name": user.name}


@router.get("/user")
async def current_user(session: session_dep, response: Response):
    if not session.data or "user" not in session.data:
        return {"loggedIn": False}

    # Sliding expiry: hand the browser a fresh cookie on every check
    set_session_cookie(response, session.session_id)
    return {"loggedIn": True, "name": session.data["user"]["name"]}


@router.post("/logout")
async def logout(session: session_dep, store: store_dep):
    if session.session_id is not None:
        try:
            await store.destroy(session.session_id)
        except SessionStoreError as error:
            logging.error(f"Failed to destroy session: {error}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"success": False, "message": "Logout failed"},
            )

    response = JSONResponse(content={"success": True})
    clear_session_cookie(response)
    return response
