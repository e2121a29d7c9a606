from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from landing_site.core.errors import ConfigurationError

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Names understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_LOG_LEVEL = "INFO"

# Checked in this order so the missing list is stable
REQUIRED_SETTINGS = ("email_user", "email_pass", "admin_email")


class Settings(BaseSettings):
    # Outbound mail account, credential and recipient - required at startup
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    admin_email: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    app_env: str = "production"
    log_level: str = "INFO"
    static_dir: Optional[str] = None

    # SMTP transport (Gmail by default)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_use_tls: bool = True
    smtp_timeout: float = 30.0

    # CORS settings
    allowed_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        """Unknown level names fall back to INFO instead of failing startup"""
        level = str(value or "").strip().upper()
        return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL

    @property
    def is_development(self) -> bool:
        """Error detail is only exposed to clients in development mode"""
        return self.app_env.strip().lower() == "development"

    @property
    def effective_static_dir(self) -> Path:
        if self.static_dir:
            return Path(self.static_dir)
        return DEFAULT_STATIC_DIR

    def missing_required(self) -> List[str]:
        """Names of the required environment variables that are unset or empty"""
        return [name.upper() for name in REQUIRED_SETTINGS if not getattr(self, name)]

    def require(self) -> "Settings":
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(missing)
        return self


@lru_cache
def get_settings():
    return Settings()
