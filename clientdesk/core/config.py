from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(slots=True)
class Settings:
    supabase_url: str | None = None
    supabase_key: str | None = None
    clients_table: str = "clients"
    branches_table: str = "branches"
    return_route: str = "/clients"
    http_timeout: float = 30.0
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @property
    def uses_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_settings() -> Settings:
    """Build settings from the process environment."""

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_key=os.getenv("SUPABASE_KEY") or None,
        clients_table=os.getenv("CLIENTS_TABLE") or "clients",
        branches_table=os.getenv("BRANCHES_TABLE") or "branches",
        return_route=os.getenv("CLIENTDESK_RETURN_ROUTE") or "/clients",
        http_timeout=_float_env("CLIENTDESK_HTTP_TIMEOUT", 30.0),
        cors_origins=origins or list(DEFAULT_CORS_ORIGINS),
        log_level=(os.getenv("CLIENTDESK_LOG_LEVEL") or "INFO").upper(),
    )
