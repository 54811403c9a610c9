from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Forum API"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = """
    Discussion forum API.

    ## Features
    * Topic listings by recency, stickiness, views, category and tag
    * Topic creation, update and removal
    * Popular tags fragment

    ## Rate Limits
    * Topics: 5 new topics per minute per member
    """
    DOCS_URL: str = "/docs"
    REDOC_URL: str = "/redoc"
    OPENAPI_URL: str = "/openapi.json"
    OPENAPI_TAGS: list[dict] = [
        {
            "name": "topics",
            "description": "Topic listings, lookups and management"
        },
        {
            "name": "categories",
            "description": "Topics listed per category"
        },
        {
            "name": "members",
            "description": "Topics started or solved by a member"
        },
        {
            "name": "tags",
            "description": "Tag listings including the popular tags fragment"
        },
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost"]

    # Database
    DB_USER: str | None = None
    DB_PASS: str | None = None
    DB_NAME: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_ECHO: bool = False
    SQLITE_URL: str = "sqlite:///./forum.db"
    TEST_DATABASE_URL: str = "sqlite://"

    @property
    def DATABASE_URL(self) -> str:
        if not self.DB_NAME:
            return self.SQLITE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Forum
    TOPICS_PER_PAGE: int = 20
    ACTIVE_TOPICS_TAKE: int = 100  # cap on totals shown by paged listings
    RSS_TOPICS_AMOUNT: int = 20
    POPULAR_TAGS_AMOUNT: int = 100

    # Rate Limiting
    TOPICS_PER_MINUTE: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    # Get the current file's directory
    current_dir = Path(__file__).resolve().parent
    # Go up one level to the project root
    root_dir = current_dir.parent

    # Initialize settings with explicit .env path
    return Settings(_env_file=root_dir / ".env")
