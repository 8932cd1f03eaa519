from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Storage ---
    DB_URL: str = "sqlite:///./class_calendar.db"
    STORAGE_KEY: str = "rit_enrollments_v2"

    # --- Validation ---
    EMAIL_DOMAIN: str = "rit.edu"
    EMAIL_LABEL: str = "RIT"

    # --- Calendar window ---
    CALENDAR_START_HOUR: int = 8
    CALENDAR_END_HOUR: int = 22
    CALENDAR_UNIT_HEIGHT: float = 60

    # --- Export / logging ---
    EXPORT_FILENAME_PREFIX: str = "rit_enrollments"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILE: str = "class_calendar.log"  # empty -> console only
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
