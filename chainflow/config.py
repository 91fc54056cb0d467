from pydantic_settings import BaseSettings
from typing import List
from pydantic import model_validator

DEFAULT_SECRET_KEY = "chainflow-super-secret-key-change-in-production"


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./chainflow.db"
    AUTO_CREATE_TABLES: bool = True
    READINESS_CHECK_DATABASE: bool = True

    # Runtime
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    APP_NAME: str = "ChainFlow"
    APP_VERSION: str = "1.0.0"
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Auth
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # Logging and HTTP hardening
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_REQUEST_ID: bool = True
    ENABLE_REQUEST_LOGGING: bool = True
    ENABLE_SECURITY_HEADERS: bool = True
    STRICT_TRANSPORT_SECURITY_SECONDS: int = 31536000

    # Domain
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    STOCK_WRITE_MAX_RETRIES: int = 3
    DEFAULT_CURRENCY: str = "USD"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    @property
    def expose_error_details(self) -> bool:
        return self.DEBUG and not self.is_production

    @model_validator(mode="after")
    def validate_production_safety(self):
        if not self.is_production:
            return self

        problems = []
        if self.DATABASE_URL.lower().startswith("sqlite"):
            problems.append("SQLite is not allowed when ENVIRONMENT is production.")
        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            problems.append("Default SECRET_KEY is not allowed in production.")
        if self.AUTO_CREATE_TABLES:
            problems.append("AUTO_CREATE_TABLES must be false in production; use Alembic migrations.")
        if problems:
            raise ValueError(" ".join(problems))
        return self


settings = Settings()
