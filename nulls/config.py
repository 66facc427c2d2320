"""
Package configuration.

Loads settings from environment variables and .env file.
The timestamp layout is not configurable; only behaviour toggles live here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from the environment.

    Attributes:
        strict_scan: Raise ScanError when a driver value is neither a
            timestamp nor NULL, instead of treating it as NULL.
        quote_json: Wrap marshalled timestamps in double quotes so the
            output is a valid JSON string.
    """

    model_config = SettingsConfigDict(
        env_prefix="NULLS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    strict_scan: bool = False
    quote_json: bool = False


settings = Settings()
