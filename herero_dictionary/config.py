from typing import List, Optional, Union
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings
from pydantic import validator

class Settings(BaseSettings):
    # Project settings
    PROJECT_NAME: str = "Herero Dictionary"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Dictionary entry management API"
    API_PREFIX: str = "/api"
    PORT: int = 5000

    # Database - prefer discrete Postgres settings; fallback to DATABASE_URL
    DATABASE_URL: str = ""  # Optional explicit URL; leave empty to assemble from fields below
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "herero_dictionary"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    DATABASE_DIALECT: str = "postgresql+asyncpg"

    # Schema bootstrap (no migration tooling)
    CREATE_TABLES_ON_STARTUP: bool = True

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app.log"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: Optional[int] = None  # None keeps page size unbounded

    # Search
    SEARCH_RESULT_LIMIT: int = 10

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

# Helper to assemble DB URL when not explicitly provided
def get_database_url() -> str:
    if settings.DATABASE_URL:
        return to_async_url(settings.DATABASE_URL)

    # URL-encode credentials to handle special characters like @ : /
    user = quote_plus(settings.POSTGRES_USER or "")
    password = quote_plus(settings.POSTGRES_PASSWORD or "")
    host = settings.POSTGRES_HOST
    port = settings.POSTGRES_PORT
    db = settings.POSTGRES_DB
    dialect = settings.DATABASE_DIALECT
    if password:
        cred = f"{user}:{password}@"
    elif user:
        cred = f"{user}@"
    else:
        cred = ""
    return to_async_url(f"{dialect}://{cred}{host}:{port}/{db}")


def to_async_url(database_url: str) -> str:
    """Rewrite sync Postgres/SQLite URLs to their asyncio drivers"""
    if database_url.startswith("postgresql+psycopg2://"):
        return database_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url
