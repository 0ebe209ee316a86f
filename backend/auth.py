import logging
from dataclasses import dataclass

from fastapi import Request, HTTPException, status
from jose import jwt, JWTError

from config import SUPABASE_JWT_SECRET, JWT_ALGORITHM, JWT_AUDIENCE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None
    token: str


def verify_token(token: str) -> dict | None:
    """Decode and verify a Supabase access token. Returns the payload or None on failure."""
    if not SUPABASE_JWT_SECRET:
        logger.error("SUPABASE_JWT_SECRET is not set; rejecting token")
        return None
    try:
        return jwt.decode(token, SUPABASE_JWT_SECRET, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        return None


def bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_header.split(" ", 1)[1]


async def get_current_user(request: Request) -> CurrentUser:
    """
    FastAPI dependency — extracts the Bearer token from the Authorization
    header, verifies it, and returns the authenticated user.
    Raises HTTP 401 if the token is missing or invalid.
    """
    token = bearer_token(request)
    payload = verify_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token payload missing required claims",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(id=user_id, email=payload.get("email"), token=token)
