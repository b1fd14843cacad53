from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "User Role Management API"
    API_PREFIX: str = "/api"

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000

    # Database (SQLite file lives in DB_PATH)
    DB_PATH: str = "./db"
    DB_FILENAME: str = "database.sqlite"
    SQL_ECHO: bool = False

    # Comma-separated list of allowed origins
    CORS_ORIGINS: str = "http://localhost:5000,http://127.0.0.1:5000"

    LOG_LEVEL: str = "INFO"

    # Kafka (audit events)
    KAFKA_ENABLED: bool = False
    KAFKA_BOOTSTRAP_SERVERS: str = "localhost:9092"
    AUDIT_TOPIC: str = "audit_events"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def database_file(self) -> Path:
        return Path(self.DB_PATH).resolve() / self.DB_FILENAME

    @property
    def DATABASE_URL(self) -> str:
        return f"sqlite+aiosqlite:///{self.database_file}"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
