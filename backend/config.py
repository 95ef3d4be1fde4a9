import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    embedding_model: str = "TechWolf/JobBERT-v2"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    rate_limit: str = "30/minute"
    log_level: str = "INFO"
    debug: bool = False

    # Company-verification adapter
    company_fetch_timeout_seconds: float = 5.0
    company_fetch_user_agent: str = "SignalScoring-Verification-Bot/1.0"

    # Memoization cache and velocity windows
    memo_cache_max_entries: int = 1024
    memo_cache_ttl_seconds: float = 0.0  # 0 disables expiry
    velocity_max_keys: int = 10_000
    registration_window_seconds: float = 3600.0
    login_window_seconds: float = 900.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
