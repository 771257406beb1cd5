from pydantic_settings import BaseSettings
from typing import Optional
import logging
import os
import tempfile


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Render - one build directory per project is created below this root
    RENDER_OUTPUT_DIR: str = os.path.join(tempfile.gettempdir(), "landly-builds")

    # Normalization limits (Unicode code points / item counts)
    PAGE_TITLE_MAX_LENGTH: int = 90
    PAGE_DESCRIPTION_MAX_LENGTH: int = 160
    FEATURES_MIN_ITEMS: int = 3

    # Payment fallbacks used to backfill CTA targets
    DEFAULT_PAYMENT_URL: str = "#"
    DEFAULT_PAYMENT_BUTTON_TEXT: str = "Связаться"
    DEFAULT_PAGE_TITLE: str = "Лендинг"

    # Publishing
    STORAGE_BACKEND: str = "local"  # local | s3
    PUBLISH_DIR: str = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "published")
    PUBLIC_BASE_URL: str = "http://localhost:8080"

    # S3 Storage (optional)
    S3_ENDPOINT_URL: Optional[str] = None
    S3_BUCKET: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None
    S3_REGION: Optional[str] = None
    S3_PUBLIC_BASE_URL: Optional[str] = None

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName((self.LOG_LEVEL or "INFO").upper())
        return level if isinstance(level, int) else logging.INFO

    @property
    def s3_configured(self) -> bool:
        return bool(self.S3_BUCKET and self.S3_ACCESS_KEY and self.S3_SECRET_KEY)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
