"""Configuration management using Pydantic Settings"""

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from PLAID_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="PLAID_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Credentials
    endpoint: str = "https://tartan.plaid.com"
    client_id: str = "test_id"
    secret: str = "test_secret"

    # Service
    service_name: str = "plaid-tartan"
    log_level: str = "INFO"

    # HTTP Client (only applied to clients we construct ourselves)
    http_timeout_seconds: float = 5.0


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint and credentials shared read-only by every request"""

    endpoint: str
    client_id: str
    secret: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ClientConfig":
        source = source or settings
        return cls(endpoint=source.endpoint, client_id=source.client_id, secret=source.secret)


settings = Settings()
