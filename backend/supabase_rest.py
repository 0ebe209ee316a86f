"""
supabase_rest.py — HTTP-based database client using Supabase's PostgREST API.
Talks to /rest/v1 with httpx; every failure comes back as BackendOperationError
carrying PostgREST's own message.
"""
import logging
from urllib.parse import quote

import httpx

from config import SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_SERVICE_ROLE_KEY, HTTP_TIMEOUT
from errors import BackendOperationError

logger = logging.getLogger(__name__)


def _client() -> httpx.Client:
    if HTTP_TIMEOUT is None:
        return httpx.Client()
    return httpx.Client(timeout=HTTP_TIMEOUT)


def _headers(access_token: str = None, prefer: str = "return=representation") -> dict:
    # With a user token, row-level security applies; without one the service key bypasses it
    if access_token:
        api_key, bearer = SUPABASE_ANON_KEY, access_token
    else:
        api_key, bearer = SUPABASE_SERVICE_ROLE_KEY, SUPABASE_SERVICE_ROLE_KEY
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {bearer}",
        "Content-Type": "application/json",
        "Prefer": prefer,
    }


def _encode(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value))


def _filter_query(filters: dict = None) -> str:
    if not filters:
        return ""
    return "&".join(f"{key}=eq.{_encode(value)}" for key, value in filters.items())


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)


def _json(resp: httpx.Response):
    return resp.json() if resp.content else []


def _send(method: str, url: str, headers: dict, json=None) -> httpx.Response:
    try:
        with _client() as client:
            resp = client.request(method, url, headers=headers, json=json)
            resp.raise_for_status()
            return resp
    except httpx.HTTPStatusError as e:
        message = _error_message(e.response)
        logger.error(f"PostgREST {method} {url} failed ({e.response.status_code}): {message}")
        raise BackendOperationError(message) from e
    except httpx.HTTPError as e:
        logger.error(f"PostgREST {method} {url} unreachable: {e}")
        raise BackendOperationError(str(e)) from e


def sb_select(table: str, filters: dict = None, columns: str = "*", order: str = None,
              access_token: str = None) -> list:
    """Select rows with equality filters. `order` uses PostgREST syntax, e.g. "created_at.desc"."""
    url = f"{SUPABASE_URL}/rest/v1/{table}?select={columns}"
    query = _filter_query(filters)
    if query:
        url += f"&{query}"
    if order:
        url += f"&order={order}"
    return _json(_send("GET", url, _headers(access_token)))


def sb_insert(table: str, data: dict, access_token: str = None) -> dict:
    """Insert a row and return the created record."""
    url = f"{SUPABASE_URL}/rest/v1/{table}"
    result = _json(_send("POST", url, _headers(access_token), json=data))
    return result[0] if isinstance(result, list) and result else {}


def sb_upsert_ignore(table: str, data: dict, on_conflict: str, access_token: str = None) -> dict:
    """Insert a row unless one already matches the `on_conflict` columns.

    Returns the created record, or an empty dict when the row already existed.
    """
    url = f"{SUPABASE_URL}/rest/v1/{table}?on_conflict={on_conflict}"
    headers = _headers(access_token, prefer="resolution=ignore-duplicates,return=representation")
    result = _json(_send("POST", url, headers, json=data))
    return result[0] if isinstance(result, list) and result else {}


def sb_delete(table: str, filters: dict, access_token: str = None) -> int:
    """Delete rows matching all equality filters. Returns the number of rows removed."""
    if not filters:
        raise ValueError("Refusing to delete without filters")
    url = f"{SUPABASE_URL}/rest/v1/{table}?{_filter_query(filters)}"
    result = _json(_send("DELETE", url, _headers(access_token)))
    return len(result) if isinstance(result, list) else 0
