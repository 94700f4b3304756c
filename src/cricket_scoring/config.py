"""Configuration management for the live scoring service."""

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment from .env if present
load_dotenv(override=False)

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = _SETTINGS_CONFIG

    url_override: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    host: Optional[str] = Field(default=None, validation_alias="DB_HOST")
    port: int = Field(default=3306, validation_alias="DB_PORT")
    name: str = Field(default="cricket_scoring", validation_alias="DB_NAME")
    user: str = Field(default="cricket_user", validation_alias="DB_USER")
    password: str = Field(default="", validation_alias="DB_PASSWORD")
    path: str = Field(default="cricket_scoring.db", validation_alias="DB_PATH")
    echo: bool = Field(default=False, validation_alias="DB_ECHO")

    @property
    def url(self) -> str:
        """Get database URL for SQLAlchemy.

        An explicit DATABASE_URL wins; a configured DB_HOST selects MySQL;
        otherwise a local SQLite file is used.
        """
        if self.url_override:
            return self.url_override
        if self.host:
            return f"mysql+mysqlconnector://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
        return f"sqlite:///{self.path}"


class ScoringSettings(BaseSettings):
    """Match setup and passcode rules."""

    model_config = _SETTINGS_CONFIG

    default_total_overs: int = Field(default=20, validation_alias="DEFAULT_TOTAL_OVERS")
    max_total_overs: int = Field(default=50, validation_alias="MAX_TOTAL_OVERS")
    min_players_per_side: int = Field(default=2, validation_alias="MIN_PLAYERS_PER_SIDE")
    passcode_min_length: int = Field(default=4, validation_alias="PASSCODE_MIN_LENGTH")
    passcode_max_length: int = Field(default=6, validation_alias="PASSCODE_MAX_LENGTH")
    passcode_hash_iterations: int = Field(default=200_000, validation_alias="PASSCODE_HASH_ITERATIONS")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = _SETTINGS_CONFIG

    level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")


class APISettings(BaseSettings):
    """HTTP server settings."""

    model_config = _SETTINGS_CONFIG

    host: str = Field(default="127.0.0.1", validation_alias="API_HOST")
    port: int = Field(default=8000, validation_alias="API_PORT")
    cors_origins_csv: str = Field(default="*", validation_alias="CORS_ORIGINS")

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins_csv.split(",") if origin.strip()]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = _SETTINGS_CONFIG

    database: DatabaseSettings = DatabaseSettings()
    scoring: ScoringSettings = ScoringSettings()
    logging: LoggingSettings = LoggingSettings()
    api: APISettings = APISettings()


# Global settings instance
settings = Settings()
