from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    # Base URL advertised in startup logs; defaults to http://localhost:<port>
    public_base_url: Optional[str] = None

    # App
    cors_origins: list[str] = ["*"]
    debug: bool = False
    log_level: str = "info"

    # Outbound fetch used by the SEO title tool (seconds)
    seo_fetch_timeout: float = 10.0

    # Seed for the language picker; unset means nondeterministic
    random_seed: Optional[int] = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("seo_fetch_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("seo_fetch_timeout must be greater than zero")
        return value

    @property
    def base_url(self) -> str:
        return (self.public_base_url or f"http://localhost:{self.port}").rstrip("/")

    @property
    def discovery_url(self) -> str:
        return f"{self.base_url}/discovery"


settings = Settings()
