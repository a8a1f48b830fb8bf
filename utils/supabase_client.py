"""
Supabase edge-function helpers (serverless-safe)

Goals:
- Never crash the app at import time.
- Read credentials at call time so a redeploy with new env vars is enough.
- Provide one robust POST helper for edge functions:
  - invoke_function
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests

from config.supabase_env import SupabaseEnv, load_supabase_env

# ----------------------------------------------------
# Requests session (shared connection pool)
# ----------------------------------------------------
_session = requests.Session()


def is_supabase_configured(env: Optional[SupabaseEnv] = None) -> bool:
    env = env or load_supabase_env()
    return bool(env.url and env.function_key)


def _ensure_config(env: SupabaseEnv) -> None:
    if not env.url:
        raise RuntimeError(
            "SUPABASE_URL is missing. Set it in .env (local) or the deployment environment."
        )
    if not env.function_key:
        raise RuntimeError(
            "No Supabase API key found. Set SUPABASE_ANON_KEY (recommended) or SUPABASE_SERVICE_ROLE_KEY."
        )


def _functions_url(env: SupabaseEnv) -> str:
    _ensure_config(env)
    return f"{env.url.rstrip('/')}/functions/v1"


def _headers(env: SupabaseEnv) -> Dict[str, str]:
    _ensure_config(env)
    return {
        "apikey": env.function_key or "",
        "Authorization": f"Bearer {env.function_key}",
        "Content-Type": "application/json",
    }


# ----------------------------------------------------
# INTERNAL: parse edge-function error JSON safely
# ----------------------------------------------------
def _try_parse_error(resp: requests.Response) -> Tuple[Optional[str], str]:
    """
    Returns (error_message, raw_text)
    """
    try:
        j = resp.json()
        if isinstance(j, dict):
            return (j.get("error") or j.get("message"), resp.text)
    except Exception:
        pass
    return (None, resp.text)


# ----------------------------------------------------
# Edge-function POST helper
# ----------------------------------------------------
def invoke_function(
    name: str,
    payload: Dict[str, Any],
    *,
    env: Optional[SupabaseEnv] = None,
) -> Dict[str, Any]:
    env = env or load_supabase_env()
    url = f"{_functions_url(env)}/{name.lstrip('/')}"

    resp = _session.post(url, headers=_headers(env), json=payload, timeout=env.timeout_seconds)

    if resp.status_code == 401:
        raise RuntimeError("Unauthorized: Invalid Supabase API key (check anon key).")

    if resp.status_code >= 400:
        message, raw = _try_parse_error(resp)
        raise RuntimeError(f"Supabase function '{name}' failed [{resp.status_code}]: {message or raw}")

    try:
        data = resp.json()
    except ValueError:
        raise RuntimeError(f"Supabase function '{name}' returned non-JSON body: {resp.text[:200]}")

    if not isinstance(data, dict):
        raise RuntimeError(f"Supabase function '{name}' returned unexpected payload type {type(data).__name__}")

    return data
