# supabase_client.py — Supabase client initialization and auth helpers

from supabase import create_client, Client
from config import SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_ANON_KEY

# Global Supabase client instances
_supabase_admin: Client = None
_supabase_client: Client = None


def get_supabase_admin() -> Client:
    """
    Get Supabase client with service role key (admin privileges).
    Used for session revocation.
    """
    global _supabase_admin

    if _supabase_admin is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables")

        _supabase_admin = create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _supabase_admin


def get_supabase_client() -> Client:
    """
    Get Supabase client with anonymous key (limited permissions).
    Used for sign-up and sign-in on behalf of end users.
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_ANON_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment variables")

        _supabase_client = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)

    return _supabase_client


def is_supabase_configured() -> bool:
    """Check if Supabase is properly configured with required environment variables."""
    return bool(SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY and SUPABASE_ANON_KEY)


# Authentication helpers
def sign_up_user(email: str, password: str, redirect_to: str = None):
    """Register a new user with Supabase Auth."""
    supabase = get_supabase_client()
    options = {"email_redirect_to": redirect_to} if redirect_to else {}
    return supabase.auth.sign_up({
        "email": email,
        "password": password,
        "options": options,
    })


def sign_in_user(email: str, password: str):
    """Sign in a user with Supabase Auth."""
    supabase = get_supabase_client()
    return supabase.auth.sign_in_with_password({
        "email": email,
        "password": password
    })


def sign_out_user(access_token: str):
    """Revoke the sessions behind an access token."""
    supabase = get_supabase_admin()
    return supabase.auth.admin.sign_out(access_token)


def session_payload(response) -> dict:
    """Flatten an AuthResponse into the JSON the API returns."""
    session = response.session
    user = response.user
    return {
        "access_token": session.access_token if session else None,
        "refresh_token": session.refresh_token if session else None,
        "expires_in": session.expires_in if session else None,
        "user": {"id": user.id, "email": user.email} if user else None,
    }
