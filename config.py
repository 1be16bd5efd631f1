from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    postgres_url: str = "postgresql://localhost:5432/candidates"
    statement_timeout_ms: int = 10000
    cache_ttl_seconds: float = 60.0
    search_result_limit: int = 500
    admin_token: Optional[str] = None
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
