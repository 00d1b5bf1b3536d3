from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Окружение: production, development, testing
    ENV: str = Field(
        "production",
        description="Application environment",
    )
    DEBUG: bool = Field(
        False,
        description="Turn on debug mode (reload, detailed errors)",
    )

    # Подключение к БД (postgresql+asyncpg://...)
    DATABASE_URL: str = Field(
        ...,
        description="Async SQLAlchemy database URL",
    )

    # Redis: кэш полного списка полигонов
    REDIS_URL: str = Field(
        "redis://localhost:6379/0",
        description="Redis connection URL",
    )
    CACHE_KEY: str = Field(
        "polygons",
        description="Key of the global polygon listing snapshot",
    )
    CACHE_TTL_SECONDS: int = Field(
        3600,
        description="Snapshot time-to-live, seconds",
    )
    CACHE_TIMEOUT_SECONDS: float = Field(
        1.0,
        description="Upper bound for a single Redis call",
    )
    STORE_TIMEOUT_SECONDS: float = Field(
        5.0,
        description="Upper bound for a single store operation",
    )

    # Общие параметры API
    API_PREFIX: str = Field(
        "",
        description="Base prefix for polygon routes",
    )
    APP_NAME: str = Field(
        "Polygon Server",
        description="Application name for docs/title",
    )
    CORS_ORIGINS: List[str] = Field(
        ["*"],
        description="Allowed origins of the map client",
    )
    HOST: str = Field("0.0.0.0", description="Bind address for run.py")
    PORT: int = Field(5000, description="Bind port for run.py")

    # Логи
    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level",
    )
    LOG_DIR: str = Field(
        "logs",
        description="Directory for log files (empty disables file logging)",
    )
    LOG_FILENAME: str = Field(
        "polygon_server.log",
        description="Log file name",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


settings = Settings()
