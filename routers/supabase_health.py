from fastapi import APIRouter
from config.supabase_env import load_supabase_env
from utils.supabase_client import is_supabase_configured

router = APIRouter()


@router.get("/__supabase")
def supabase_health():
    env = load_supabase_env()

    url_set = bool(env.url)
    publishable_set = bool(env.publishable_key)
    secret_set = bool(env.secret_key)

    if publishable_set:
        key_in_use = "anon"
    elif secret_set:
        key_in_use = "service_role"
    else:
        key_in_use = "none"

    configured = is_supabase_configured(env)

    return {
        "configured": configured,
        "url_set": url_set,
        "url_preview": f"{env.url[:35]}..." if env.url else None,
        "service_role_set": secret_set,
        "anon_set": publishable_set,
        "key_in_use": key_in_use,
        "function_name": env.function_name,
        "function_url": f"{env.url.rstrip('/')}/functions/v1/{env.function_name}" if env.url else None,
        "config_error": None if configured else "SUPABASE_URL or SUPABASE_ANON_KEY missing",
    }
