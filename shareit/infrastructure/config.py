from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHAREIT_", env_file=".env", extra="ignore")

    # File-backed so that concurrent sessions are isolated. An in-memory URL shares one
    # connection across sessions and is for tests only.
    database_url: str = "sqlite+pysqlite:///./shareit.db"
    # Seconds a SQLite writer waits for another transaction's lock.
    database_busy_timeout: float = 5.0
    openapi_path: Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"
    log_level: str = "INFO"
    user_id_header: str = "X-Sharer-User-Id"


settings = Settings()
