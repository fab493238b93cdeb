"""Unified configuration — Pydantic Settings.

Every value comes from environment variables. Precedence:
  1. Environment (docker-compose env, .env)
  2. Pydantic Settings defaults
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """Database settings. `DB_URL` overrides the assembled MySQL URL."""

    host: str = "localhost"
    port: int = 3306
    user: str = "seedling"
    password: str = ""
    name: str = "seedling_prime"
    url_override: str = Field(default="", validation_alias="DB_URL")

    model_config = {"env_prefix": "DB_", "populate_by_name": True}

    @property
    def url(self) -> str:
        if self.url_override:
            return self.url_override
        return f"mysql+pymysql://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class RedisConfig(BaseSettings):
    """Redis settings."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str = ""
    connect_timeout: float = 5.0
    socket_timeout: float = 15.0
    health_check_interval: int = 30

    model_config = {"env_prefix": "REDIS_"}

    @property
    def url(self) -> str:
        if self.password:
            return f"redis://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"redis://{self.host}:{self.port}/{self.db}"


class FinnhubConfig(BaseSettings):
    """Finnhub market data API."""

    api_key: str = ""
    base_url: str = "https://finnhub.io/api/v1"
    timeout: float = 10.0

    model_config = {"env_prefix": "FINNHUB_"}


class MailConfig(BaseSettings):
    """Outbound SMTP."""

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    username: str = ""
    password: str = ""
    sender: str = ""  # falls back to username
    sender_name: str = "SeedlingPrime Alerts"
    use_tls: bool = True
    timeout: float = 30.0

    model_config = {"env_prefix": "MAIL_"}

    @property
    def from_address(self) -> str:
        return self.sender or self.username


class AlertScanConfig(BaseSettings):
    """Alert scan pipeline."""

    quote_max_workers: int = 8
    quote_cache_ttl: int = 900  # seconds; matches the 15-minute scan cadence
    scan_lock_ttl: int = 600
    display_timezone: str = "America/New_York"

    model_config = {"env_prefix": "ALERTS_"}


class AppConfig(BaseSettings):
    """Top-level settings composed from the sub-configs.

    Usage:
        from seedling_prime.domain.config import get_config
        config = get_config()
        print(config.db.url)
        print(config.alerts.quote_cache_ttl)
    """

    env: str = Field(default="production", description="development | staging | production")
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = True

    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    finnhub: FinnhubConfig = Field(default_factory=FinnhubConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    alerts: AlertScanConfig = Field(default_factory=AlertScanConfig)

    model_config = {"env_prefix": "APP_"}


@lru_cache
def get_config() -> AppConfig:
    """Process-wide settings instance.

    Reads the environment once per process. Tests call get_config.cache_clear().
    """
    return AppConfig()
