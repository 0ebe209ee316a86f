"""
Auth routes — pass-through to Supabase Auth.
Sign-up, password sign-in and sign-out are handled by Supabase; this service
only relays the session and reads the identity back from the access token.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from auth import CurrentUser, bearer_token, get_current_user
from supabase_client import sign_up_user, sign_in_user, sign_out_user, session_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class AuthRequest(BaseModel):
    email: str
    password: str


class SignUpRequest(AuthRequest):
    redirect_to: Optional[str] = None


# ── Routes ────────────────────────────────────────────────────────
@router.post("/signup")
def signup(body: SignUpRequest):
    try:
        response = sign_up_user(body.email, body.password, body.redirect_to)
    except Exception as e:
        logger.warning(f"Sign-up failed for {body.email}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "data": session_payload(response)}


@router.post("/login")
def login(body: AuthRequest):
    try:
        response = sign_in_user(body.email, body.password)
    except Exception as e:
        logger.info(f"Login failed for {body.email}: {e}")
        raise HTTPException(status_code=401, detail=str(e))
    return {"status": "success", "data": session_payload(response)}


@router.post("/logout")
def logout(request: Request, user: CurrentUser = Depends(get_current_user)):
    try:
        sign_out_user(bearer_token(request))
    except Exception as e:
        logger.error(f"Sign-out failed for {user.id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "success"}


@router.get("/me")
def me(user: CurrentUser = Depends(get_current_user)):
    return {"id": user.id, "email": user.email}
