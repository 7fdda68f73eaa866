"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from dual_tracker.models.filters import FilterConfig


class AssetsConfig(BaseModel):
    # The first stable asset is the default quote asset for contracts
    # funded in their underlying.
    stable_assets: list[str] = Field(default_factory=lambda: ["USDT", "USDC"], min_length=1)

    @field_validator("stable_assets")
    @classmethod
    def _upper(cls, value: list[str]) -> list[str]:
        return [v.strip().upper() for v in value if v.strip()]

    @property
    def quote_asset(self) -> str:
        return self.stable_assets[0]


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
