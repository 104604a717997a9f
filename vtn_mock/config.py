from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_HOST: str = "127.0.0.1"
    SERVICE_PORT: int = 8080
    MAX_BODY_SIZE: int = 65536
    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"
    # Static credential checked by the authorization gate
    BEARER_TOKEN: str = "iamasupersecrettoken"
    # Token endpoint: expected Basic header and the token handed out
    BASIC_AUTH_HEADER: str = ""
    DUMMY_TOKEN: str = "iamasupersecrettoken"
    # Callback for the generated "test" subscription
    DEFAULT_CALLBACK_URL: AnyUrl | None = None
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0
    SEED_EVENT: bool = True

    @property
    def bearer_header(self) -> str:
        return f"Bearer {self.BEARER_TOKEN}"

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
