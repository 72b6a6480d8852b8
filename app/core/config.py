from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "School Management API"
    debug: bool = False
    environment: str = "development"  # development, production
    log_level: str = ""  # DEBUG, INFO, WARNING, ERROR, CRITICAL (empty = auto based on environment)
    log_to_file: bool = True  # Enable file logging
    log_dir: str = "logs"

    # Database (SQLite for local dev, PostgreSQL for production)
    database_url: str = "sqlite:///./school.db"

    # Frontend
    frontend_url: str = "http://localhost:5173"

    # CORS (comma-separated origins, empty = local defaults)
    allowed_origins: str = ""

    # Rate limiting (slowapi syntax, e.g. "120/minute")
    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
