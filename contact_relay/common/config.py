import logging
import sys
from typing import List

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env if present
load_dotenv()

logger = logging.getLogger(__name__)

RESEND_KEY_PREFIX = "re_"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    RESEND_API_KEY: str
    RESEND_API_URL: str = "https://api.resend.com/emails"
    RESEND_TIMEOUT_SECONDS: float = 10.0

    # Email settings
    FROM_EMAIL: str
    TO_EMAIL: str

    # Comma-separated; empty means any origin that is present
    ALLOWED_ORIGIN: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "info"

    @field_validator("RESEND_API_KEY", "FROM_EMAIL", "TO_EMAIL", "ALLOWED_ORIGIN", mode="before")
    def strip_value(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("RESEND_API_KEY")
    def validate_api_key(cls, value: str) -> str:
        if not value.startswith(RESEND_KEY_PREFIX):
            raise ValueError(f"must start with '{RESEND_KEY_PREFIX}'")
        return value

    @field_validator("FROM_EMAIL", "TO_EMAIL")
    def require_address(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGIN.split(",") if origin.strip()]

    @property
    def masked_api_key(self) -> str:
        return self.RESEND_API_KEY[:8] + "…"


def load_settings() -> Settings:
    """
    Build the process settings from the environment.

    Invalid or missing configuration is fatal: every violation is logged
    and the process exits before any request can be served.
    """
    try:
        return Settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            logger.critical("Invalid configuration %s: %s", field, error["msg"])
        sys.exit(1)
