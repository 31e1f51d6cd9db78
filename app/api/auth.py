"""Sign-up, login and session endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app import config
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_session_claims, issue_session_token
from app.models.user import UserPublic
from app.services.account_service import (
    AccountExistsError,
    AccountService,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SignupResponse(BaseModel):
    message: str
    user_id: str
    email: str


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    user: UserPublic


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(request: SignupRequest, repos: RepositoryFactory = Depends(get_repositories)):
    """Register a new account"""
    if not request.name or not request.email or not request.password:
        raise HTTPException(status_code=400, detail="All fields are required")

    service = AccountService(repos)
    try:
        user = await service.sign_up(request.name, request.email, request.password)
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create user {request.email}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create user: {str(e)}")

    return {"message": "User created successfully", "user_id": user.id, "email": user.email}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Check credentials and set the session cookie"""
    if not request.email or not request.password:
        raise HTTPException(status_code=400, detail="All fields are required")

    service = AccountService(repos)
    try:
        user = await service.authenticate(request.email, request.password)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

    try:
        token = issue_session_token(user.id, user.email, user.name)
    except ValueError as e:
        logger.error(f"Configuration error: {str(e)}")
        raise HTTPException(status_code=500, detail="Authentication is not properly configured")

    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=config.SESSION_MAX_AGE_SECONDS,
        path="/",
    )
    logger.info(f"User {user.id} logged in")
    return {
        "message": "Login successful",
        "user": UserPublic(user_id=user.id, name=user.name, email=user.email),
    }


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(key=config.SESSION_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/session")
async def get_session(request: Request):
    """Current session claims, or {"data": null} when not logged in"""
    try:
        claims = await get_session_claims(request, request.headers.get("Authorization"))
    except HTTPException:
        return JSONResponse({"data": None})

    return {
        "user_id": claims.get("sub"),
        "email": claims.get("email"),
        "name": claims.get("name"),
    }
