from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Weighbridge Settlement"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Any SQLAlchemy URL; SQLite keeps local runs dependency free
    DATABASE_URL: str = "sqlite:///./weighbridge.db"
    SQL_ECHO: bool = False


settings = Settings()  # type: ignore
