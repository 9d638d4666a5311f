from pathlib import Path
from typing import List
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # MySQL (WordPress schema)
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USERNAME: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str = "wordpress"
    DB_POOL_SIZE: int = 10
    DB_ECHO: bool = False

    # Response cache
    CACHE_TTL_SECONDS: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"

    # Shared secret expected in the x-api-key header
    BLOG_API_KEY: str = ""

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def mysql_url(self) -> str:
        return (
            f"mysql+aiomysql://{quote_plus(self.MYSQL_USERNAME)}:{quote_plus(self.MYSQL_PASSWORD)}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DATABASE}"
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings
