from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Profile reads/writes and bootstrap; anon key when unset

    # App
    app_name: str = "wonlink-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_rate_limit: str = "10/minute"  # applied to sign-in / sign-up
    rate_limit_enabled: bool = True

    # Auth redirects
    site_url: Optional[str] = None  # Falls back to the request base URL
    session_cookie_name: str = "sb-access-token"
    pkce_cookie_name: str = "sb-code-verifier"  # OAuth start -> callback
    auth_fallback_path: str = "/auth"
    brand_dashboard_path: str = "/brand/dashboard"
    influencer_dashboard_path: str = "/influencer/dashboard"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
