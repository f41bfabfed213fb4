"""Signup, login and logout."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from akwaaba_shared.config import settings

from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.system import LoginRequest, SignupRequest
from akwaaba_api.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=201)
async def signup(body: SignupRequest):
    try:
        result = auth_service.signup(body)
    except auth_service.AuthFailed as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    message = (
        "Account created. Your agent profile is pending verification."
        if body.user_role == "agent"
        else "Account created successfully"
    )
    return wrap_response(result, message=message)


@router.post("/login")
async def login(body: LoginRequest):
    try:
        result = auth_service.login(str(body.email), body.password)
    except auth_service.AuthFailed as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    response = JSONResponse(wrap_response(result, message="Signed in successfully"))
    session = result["session"]
    response.set_cookie(
        settings.session_cookie_name,
        session["access_token"],
        max_age=session.get("expires_in") or 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse({"message": "Signed out successfully"})
    response.delete_cookie(settings.session_cookie_name, path="/")
    return response
