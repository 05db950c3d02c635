"""Application settings and configuration.

This module defines all configuration options for the Stratizen Hub application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stratizen_hub.core.points import PointsPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the Stratizen Hub application.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Stratizen Hub", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(default="dev-secret-change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    # Accepted for every account in addition to its own password.
    default_password: str = Field(default="stratizens#web", alias="DEFAULT_PASSWORD")

    # Database configuration
    database_url: str = Field(default="sqlite:///./stratizen.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Object storage for uploaded resource files
    storage_root: str = Field(default="./storage", alias="STORAGE_ROOT")
    storage_bucket: str = Field(default="resources", alias="STORAGE_BUCKET")
    storage_public_base_url: str = Field(
        default="http://localhost:8000/files",
        alias="STORAGE_PUBLIC_BASE_URL",
    )
    max_upload_bytes: int = Field(default=25 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")

    # Point policy (one canonical value per event)
    points_login: int = Field(default=5, alias="POINTS_LOGIN")
    points_upload_note: int = Field(default=50, alias="POINTS_UPLOAD_NOTE")
    points_upload_assignment: int = Field(default=10, alias="POINTS_UPLOAD_ASSIGNMENT")
    points_upload_past_paper: int = Field(default=20, alias="POINTS_UPLOAD_PAST_PAPER")
    points_like_received: int = Field(default=5, alias="POINTS_LIKE_RECEIVED")
    points_dislike_received: int = Field(default=-2, alias="POINTS_DISLIKE_RECEIVED")
    points_completion_on_time: int = Field(default=10, alias="POINTS_COMPLETION_ON_TIME")
    points_completion_overdue: int = Field(default=3, alias="POINTS_COMPLETION_OVERDUE")
    points_comment: int = Field(default=1, alias="POINTS_COMMENT")
    award_comment_points: bool = Field(default=False, alias="AWARD_COMMENT_POINTS")

    # Rankings
    unit_ranking_limit: int = Field(default=10, alias="UNIT_RANKING_LIMIT")
    leaderboard_limit: int = Field(default=5, alias="LEADERBOARD_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def points_policy(self) -> PointsPolicy:
        """Return the configured point deltas as an immutable policy table."""
        return PointsPolicy(
            login=self.points_login,
            upload_note=self.points_upload_note,
            upload_assignment=self.points_upload_assignment,
            upload_past_paper=self.points_upload_past_paper,
            like_received=self.points_like_received,
            dislike_received=self.points_dislike_received,
            completion_on_time=self.points_completion_on_time,
            completion_overdue=self.points_completion_overdue,
            comment=self.points_comment,
            award_comment_points=self.award_comment_points,
        )


settings = Settings()  # type: ignore[call-arg]
