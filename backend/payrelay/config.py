"""
Application Configuration — Environment & Settings
Centralizes gateway endpoints, credentials, bank codes and runtime options
from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "Mobile Money Payment Relay"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'payments.db'}"

    # --- Upstream gateway ---
    AUTH_API_URL: str = ""
    NAME_ENQUIRY_API_URL: str = ""
    COLLECTION_API_URL: str = ""
    GATEWAY_USERNAME: str = Field("", validation_alias=AliasChoices("GATEWAY_USERNAME", "USERNAME"))
    GATEWAY_PASSWORD: str = Field("", validation_alias=AliasChoices("GATEWAY_PASSWORD", "PASSWORD"))
    GATEWAY_TIMEOUT_SECONDS: Optional[float] = None  # None keeps the httpx default
    PARTNER_CODE: str = ""

    # --- Network -> settlement bank codes ---
    MTN_BANK_CODE: str = ""
    AIRTELTIGO_BANK_CODE: str = ""
    TELECEL_BANK_CODE: str = ""

    # --- Transactions ---
    TRANSACTION_ID_PREFIX: str = "MSH-"
    TRANSACTION_ID_GAP_MS: int = 10
    DEFAULT_NARRATION: str = "Payment Gateway Transaction"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = str(BASE_DIR / "logs")

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
