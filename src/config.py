"""Application configuration loaded from environment variables and .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./relics.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Static game tables
    RELIC_DATA_PATH: str = str(DATA_DIR / "relic_data.json")
    STAT_CONSTANTS_PATH: str = str(DATA_DIR / "stat_constants.json")
    CHARACTER_DATA_PATH: str = str(DATA_DIR / "character_data.json")


settings = Settings()
