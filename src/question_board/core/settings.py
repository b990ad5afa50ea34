# src/question_board/core/settings.py
"""Runtime configuration for the Question Board service.

Values come from environment variables (or a local ``.env``) under the
upper-case aliases below. ``SECRET_KEY`` is the only required one.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Bare PostgreSQL URLs select psycopg2 in SQLAlchemy; this service ships psycopg 3.
_POSTGRES_PREFIXES = ("postgres://", "postgresql://", "postgresql+asyncpg://")


class Settings(BaseSettings):
    """Service settings resolved once at import time."""

    app_name: str = Field(default="Question Board", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Bearer tokens are minted by the identity provider with this key.
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    database_url: str = Field(default="sqlite:///./question_board.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    # Local SQLite runs can skip Alembic and build the schema on startup.
    auto_create_tables: bool = Field(default=False, alias="AUTO_CREATE_TABLES")

    # Question listings
    default_page_size: int = Field(default=50, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="MAX_PAGE_SIZE")
    # PostgreSQL text search configuration used for related-question lookups.
    search_language: str = Field(default="english", alias="SEARCH_LANGUAGE")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _page_sizes_consistent(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")
        return self

    @property
    def effective_database_url(self) -> str:
        """Return the test database URL when testing mode is on, else the main one."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return the active URL with PostgreSQL pinned to the psycopg 3 driver."""
        url = self.effective_database_url
        for prefix in _POSTGRES_PREFIXES:
            if url.startswith(prefix):
                return "postgresql+psycopg://" + url[len(prefix):]
        return url


settings = Settings()  # type: ignore[call-arg]
