import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SupabaseEnv:
    url: str | None
    publishable_key: str | None
    secret_key: str | None
    function_name: str = "calculate-resilience"
    timeout_seconds: float = 30.0

    @property
    def function_key(self) -> str | None:
        # Edge functions are called with the public anon key, like the browser does.
        return self.publishable_key or self.secret_key


def load_supabase_env() -> SupabaseEnv:
    url = (os.getenv("SUPABASE_URL") or os.getenv("SUPABASE_PROJECT_URL") or "").strip() or None

    publishable_key = (
        os.getenv("SUPABASE_ANON_KEY")
        or os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY")  # frontend naming
        or ""
    ).strip() or None

    secret_key = (os.getenv("SUPABASE_SERVICE_ROLE_KEY") or "").strip() or None

    function_name = (os.getenv("RESILIENCE_FUNCTION_NAME") or "calculate-resilience").strip()

    try:
        timeout_seconds = float(os.getenv("SUPABASE_TIMEOUT_SECONDS", "30"))
    except ValueError:
        timeout_seconds = 30.0

    return SupabaseEnv(
        url=url,
        publishable_key=publishable_key,
        secret_key=secret_key,
        function_name=function_name,
        timeout_seconds=timeout_seconds,
    )
