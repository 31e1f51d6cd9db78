"""
Session authentication

Resolves an inbound request to the opaque user id. The id travels in an
HS256-signed JWT, either in the httpOnly session cookie set at login or in
an `Authorization: Bearer <token>` header.
"""
import time
import logging
from typing import Optional, Dict, Any
from fastapi import HTTPException, Header, Request
from jose import jwt, JWTError

from app import config

logger = logging.getLogger(__name__)


def _get_secret() -> str:
    """Get the session signing secret from configuration"""
    if not config.SESSION_SECRET:
        raise ValueError("SESSION_SECRET must be set")
    return config.SESSION_SECRET


def issue_session_token(user_id: str, email: str, name: str) -> str:
    """
    Create a signed session token for a logged-in user

    Args:
        user_id: Opaque user id, stored in the 'sub' claim
        email: User email
        name: Display name

    Returns:
        Encoded JWT valid for SESSION_MAX_AGE_SECONDS
    """
    now = int(time.time())
    claims = {
        "sub": user_id,
        "email": email,
        "name": name,
        "iat": now,
        "exp": now + config.SESSION_MAX_AGE_SECONDS,
    }
    return jwt.encode(claims, _get_secret(), algorithm=config.SESSION_ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify a session token and return its claims.
    Raises HTTPException if verification fails
    """
    try:
        return jwt.decode(token, _get_secret(), algorithms=[config.SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=401,
            detail="Session has expired"
        )
    except jwt.JWTClaimsError as e:
        raise HTTPException(
            status_code=401,
            detail=f"Session validation failed: {str(e)}"
        )
    except JWTError as e:
        logger.warning(f"Invalid session token: {e}")
        raise HTTPException(
            status_code=401,
            detail="Invalid session"
        )
    except ValueError as e:
        logger.error(f"Configuration error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="Authentication is not properly configured"
        )


def get_user_id_from_payload(payload: Dict[str, Any]) -> str:
    """
    Extract user ID from JWT payload
    Raises HTTPException if user ID is not present
    """
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=401,
            detail="Invalid session: no user ID"
        )
    return user_id


def _extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    """Session cookie first, then the Authorization header"""
    cookie = request.cookies.get(config.SESSION_COOKIE_NAME)
    if cookie:
        return cookie

    if not authorization:
        return None

    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )
    if scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization scheme. Expected 'Bearer'"
        )
    return token


async def get_session_claims(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> Dict[str, Any]:
    """FastAPI dependency returning the verified session claims"""
    token = _extract_token(request, authorization)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized"
        )
    return verify_token(token)


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> str:
    """
    FastAPI dependency resolving the request to the authenticated user ID
    """
    payload = await get_session_claims(request, authorization)
    return get_user_id_from_payload(payload)


async def get_current_user_id_optional(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> Optional[str]:
    """
    Optional authentication - returns user_id if valid session, None otherwise
    """
    try:
        return await get_current_user_id(request, authorization)
    except HTTPException:
        return None
