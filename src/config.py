from __future__ import annotations

from functools import cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.quoter import UNISWAP_V3_QUOTER_ADDRESS


class AppSettings(BaseSettings):
    rpc_url: str
    quoter_address: str = UNISWAP_V3_QUOTER_ADDRESS
    chain_id: int | None = None
    request_timeout: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("request_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be > 0")
        return value


@cache
def config() -> AppSettings:
    return AppSettings()  # type: ignore[call-arg]
