from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for lookups that bypass RLS and for auth admin calls

    # Project token handoff
    project_token_secret: Optional[str] = None
    nextauth_secret: Optional[str] = None  # Legacy fallback shared with the web frontend
    project_token_issuer: str = "portal"
    project_token_audience: str = "pol-app"

    # App
    app_name: str = "portal-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_project_token_secret(self) -> Optional[str]:
        return self.project_token_secret or self.nextauth_secret or None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
