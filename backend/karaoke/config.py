"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./karaoke.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    OPERATOR_TOKEN: str = ""
    DEFAULT_SONG_MINUTES: float = 4.5
    JOIN_CODE_LENGTH: int = 6
    JOIN_CODE_ATTEMPTS: int = 5
    DELETE_BATCH_SIZE: int = 400
    OPERATOR_NICKNAME: str = "REGIA"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
