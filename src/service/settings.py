from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Dataset: filesystem path or http(s) URL, re-read on every load
    dataset_source: str = Field(default="Cleaned_Car_data.csv", alias="DATASET_SOURCE")

    # Scoring endpoint
    prediction_base_url: str = Field(default="http://localhost:5000", alias="PREDICTION_BASE_URL")
    prediction_timeout_seconds: float | None = Field(default=None, alias="PREDICTION_TIMEOUT_SECONDS")
    currency_prefix: str = Field(default="₹", alias="CURRENCY_PREFIX")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
