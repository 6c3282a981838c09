from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Session lifecycle
    SESSION_TIMEOUT_SECONDS: float = 300.0
    REAPER_INTERVAL_SECONDS: float = 60.0

    # Message pipeline
    TOOLS_ENABLED: bool = True

    # Replies kept per channel for GET /channels/{id}/outbox
    OUTBOX_MAX_MESSAGES: int = 100

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
