from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    """Global SMS configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)

    SMS_PROVIDER: str = Field(default="GatewayAPI")

    GATEWAY_API_BASE_URL: Optional[str] = None
    GATEWAY_API_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    SERWER_SMS_BASE_URL: Optional[str] = None
    SERWER_SMS_TIMEOUT: Optional[float] = Field(default=None, gt=0)
    # Maps Serwer SMS error codes to human readable text.
    SERWER_SMS_ERROR_CODES: dict[int, str] = Field(default_factory=dict)

    SMS77_BASE_URL: Optional[str] = None
    SMS77_SMS_SEND_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    SMSTOOL_BASE_URL: Optional[str] = None
    SMSTOOL_SMS_SEND_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    VERIMOR_BASE_URL: Optional[str] = None
    VERIMOR_SMS_SEND_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    PLAY_SMS_SEND_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    @field_validator(
        "GATEWAY_API_BASE_URL",
        "SERWER_SMS_BASE_URL",
        "SMS77_BASE_URL",
        "SMSTOOL_BASE_URL",
        "VERIMOR_BASE_URL",
        mode="before",
    )
    @classmethod
    def blank_url_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            v = v.strip().strip('"\'')
            return v or None
        return v


load_dotenv(ENV_FILE)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
