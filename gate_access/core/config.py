# Standard library imports
import os
from typing import Final, Optional


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the gate service.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "campus_gate_access")
        self.mongo_use_transactions: Final[bool] = _get_bool("MONGO_USE_TRANSACTIONS", "true")
        self.mongo_timeout_ms: Final[int] = int(os.getenv("MONGO_TIMEOUT_MS", "10000"))

        # Calendar day boundaries are taken in this timezone
        self.local_timezone: Final[str] = os.getenv("LOCAL_TIMEZONE", "Asia/Kolkata")

        # Recognition Configuration
        # Euclidean distance; lower = stricter
        self.match_threshold: Final[float] = float(os.getenv("MATCH_THRESHOLD", "0.6"))
        self.descriptor_dimension: Final[int] = int(os.getenv("DESCRIPTOR_DIMENSION", "128"))
        self.matcher_workers: Final[int] = max(1, int(os.getenv("MATCHER_WORKERS", "1")))
        self.directory_refresh_seconds: Final[float] = float(
            os.getenv("DIRECTORY_REFRESH_SECONDS", "300")
        )

        # Gate policy Configuration
        self.cooldown_seconds: Final[float] = float(os.getenv("COOLDOWN_SECONDS", "30"))

        # Persistence resilience
        self.persistence_max_retries: Final[int] = int(os.getenv("PERSISTENCE_MAX_RETRIES", "2"))
        self.persistence_retry_delay: Final[float] = float(
            os.getenv("PERSISTENCE_RETRY_DELAY", "0.2")
        )
        self.transition_max_attempts: Final[int] = max(
            1, int(os.getenv("TRANSITION_MAX_ATTEMPTS", "3"))
        )

        # Logging Configuration
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: Final[str] = os.getenv("LOG_DIR", "logs")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
