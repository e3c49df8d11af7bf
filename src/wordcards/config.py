"""Configuration settings for the flashcard application."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///wordcards.db"))
    echo: bool = field(default_factory=lambda: os.getenv("DATABASE_ECHO", "false").lower() == "true")
    timeout: float = field(default_factory=lambda: float(os.getenv("DATABASE_TIMEOUT", "10")))


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = field(default_factory=lambda: os.getenv("LOG_DIR", None))
    rotation: str = field(default_factory=lambda: os.getenv("LOG_ROTATION", "midnight"))
    interval: int = field(default_factory=lambda: int(os.getenv("LOG_INTERVAL", "1")))
    backup_count: int = field(default_factory=lambda: int(os.getenv("LOG_BACKUP_COUNT", "7")))


@dataclass
class BotSettings:
    """Bot configuration settings."""
    token: str = field(default_factory=lambda: os.getenv("TELEGRAM_BOT_TOKEN", ""))


@dataclass
class ProgressSettings:
    """Progress tracking settings."""
    # Calendar days for studied_days are counted in this time zone
    timezone: str = field(default_factory=lambda: os.getenv("STUDY_DAY_TIMEZONE", "UTC"))


@dataclass
class IdentitySettings:
    """Account and password settings."""
    password_pepper: str = field(default_factory=lambda: os.getenv("PASSWORD_PEPPER", ""))
    min_password_length: int = field(default_factory=lambda: int(os.getenv("MIN_PASSWORD_LENGTH", "6")))


@dataclass
class MonitoringSettings:
    """Prometheus metrics settings."""
    enabled: bool = field(default_factory=lambda: os.getenv("METRICS_ENABLED", "false").lower() == "true")
    port: int = field(default_factory=lambda: int(os.getenv("METRICS_PORT", "9090")))


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    bot: BotSettings = field(default_factory=BotSettings)
    progress: ProgressSettings = field(default_factory=ProgressSettings)
    identity: IdentitySettings = field(default_factory=IdentitySettings)
    monitoring: MonitoringSettings = field(default_factory=MonitoringSettings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        try:
            ZoneInfo(self.progress.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"STUDY_DAY_TIMEZONE is not a known time zone: {self.progress.timezone}") from e

        if self.database.timeout <= 0:
            raise ValueError("DATABASE_TIMEOUT must be positive")

        if self.identity.min_password_length < 6:
            raise ValueError("MIN_PASSWORD_LENGTH must be at least 6")

    def validate_bot(self) -> None:
        """Validate the settings needed to run the Telegram bot."""
        if not self.bot.token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required")


# Create global settings instance
settings = Settings()
settings.validate()
