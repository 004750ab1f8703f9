from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):  # type: ignore[misc]
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Database settings (credentials MUST be provided via environment)
    DB_USER: str
    DB_PASSWORD: SecretStr
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "quotes"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_COMMAND_TIMEOUT: float = 10.0

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL from individual components."""
        password = self.DB_PASSWORD.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Database initialization settings
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    # Deadline applied around every HTTP endpoint
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Pagination defaults
    DEFAULT_PAGE_SIZE: int = 20

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_CONSOLE_FORMAT: str = "human"
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    # Paths to exclude from access logs
    LOG_EXCLUDED_PATHS: list[str] = ["/healthz", "/readyz"]

    # Origins allowed to call the API from a browser
    CORS_ALLOWED_ORIGINS: list[str] = ["*"]

    @field_validator("LOG_CONSOLE_FORMAT")
    @classmethod
    def validate_console_format(cls, v: str) -> str:
        """Only "human" and "json" console output are supported."""
        if v not in ("human", "json"):
            raise ValueError("LOG_CONSOLE_FORMAT must be 'human' or 'json'")
        return v


app_settings = Settings()
