# app/core/config.py
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DEPLOY_PHASE: str = "local"
    LOG_LEVEL: str = "INFO"
    BCRYPT_ROUNDS: int = 12

    # DB 접속 정보 (DATABASE_URL이 없으면 DB_* 값으로 조립)
    DATABASE_URL: Optional[str] = None
    DB_USER: str = "postgres"
    DB_PWD: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "users"
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    API_PREFIX: str = ""
    CORS_ORIGINS: List[str] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PWD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def docs_enabled(self) -> bool:
        return self.DEPLOY_PHASE in ("dev", "local")


settings = Settings()
