"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Relational store (any SQLAlchemy URL)
    database_url: str = "sqlite:///./defi_tracker.db"

    # Redis
    redis_host: str = "redis"
    redis_port: int = 6379

    # JWT / session cookie
    jwt_secret_key: str = "CHANGE_ME_IN_PRODUCTION_USE_STRONG_SECRET"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24
    session_cookie_name: str = "session"
    session_cookie_secure: bool = False

    # Rate limiting
    login_rate_limit_attempts: int = 5
    login_rate_limit_window_seconds: int = 60
    user_lockout_threshold: int = 10
    user_lockout_duration_minutes: int = 30

    # Market data
    coingecko_url: str = "https://api.coingecko.com/api/v3"
    market_cache_ttl_seconds: int = 60
    news_cache_ttl_seconds: int = 300

    # Blockchain RPC
    ethereum_rpc_url: str = "https://eth.llamarpc.com"
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_timeout_seconds: float = 10.0
    rpc_max_retries: int = 3
    rpc_base_delay: float = 1.0
    rpc_max_delay: float = 5.0
    rpc_backoff_factor: float = 2.0

    # HTTP
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit default
        "http://streamlit_frontend:8501",  # Docker network
        "http://localhost:3000",  # Development
    ]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
