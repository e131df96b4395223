"""Module: config."""

from pydantic_settings import BaseSettings

# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # SQLAlchemy connection string; SQLite file next to the process by default.
    database_url: str = "sqlite:///./vet_records.db"
    # Echo every SQL statement to the log (noisy, development only).
    sql_echo: bool = False
    log_level: str = "INFO"

    # Browser origins allowed to call the API (the SPA dev servers).
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    host: str = "127.0.0.1"
    port: int = 3001

    # Dashboard: vaccines due within this many days (or overdue) are listed.
    upcoming_vaccine_window_days: int = 60
    upcoming_vaccine_limit: int = 10

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

# Global settings instance imported by app modules at runtime.
settings = Settings()
