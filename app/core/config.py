# app/core/config.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GHN_BASE_URL_PRODUCTION = "https://online-gateway.ghn.vn"
GHN_BASE_URL_DEVELOPMENT = "https://dev-online-gateway.ghn.vn"
GHTK_BASE_URL_PRODUCTION = "https://services.giaohangtietkiem.vn"


@dataclass(frozen=True)
class ProviderCredentials:
    """
    Connection parameters for one upstream provider.

    Built once from settings and handed to the gateway constructor;
    an empty token means the provider is not configured (mock mode).
    """

    token: str
    shop_id: int
    base_url: str
    timeout_s: float = 10.0

    @property
    def configured(self) -> bool:
        return bool((self.token or "").strip())


class AppSettings(BaseSettings):
    """
    Application settings (env / .env)
    """

    # logging
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOG: bool = Field(default=False)

    # fee wire variant; anything else fails at startup
    SHIPPING_PROVIDER: Literal["ghn", "ghtk"] = Field(default="ghn")

    # GHN: empty token => mock mode
    GHN_TOKEN: str = Field(default="")
    GHN_SHOP_ID: int = Field(default=0)
    GHN_BASE_URL: str = Field(default=GHN_BASE_URL_DEVELOPMENT)

    # GHTK
    GHTK_TOKEN: str = Field(default="")
    GHTK_BASE_URL: str = Field(default=GHTK_BASE_URL_PRODUCTION)

    UPSTREAM_TIMEOUT_S: float = Field(default=10.0, gt=0)

    # comma separated: "http://localhost:3000,http://localhost:5173"
    CORS_ORIGINS: str = Field(default="*")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("SHIPPING_PROVIDER", mode="before")
    @classmethod
    def _normalize_provider(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def ghn_credentials(self) -> ProviderCredentials:
        return ProviderCredentials(
            token=self.GHN_TOKEN,
            shop_id=int(self.GHN_SHOP_ID),
            base_url=self.GHN_BASE_URL.rstrip("/"),
            timeout_s=float(self.UPSTREAM_TIMEOUT_S),
        )

    def ghtk_credentials(self) -> ProviderCredentials:
        return ProviderCredentials(
            token=self.GHTK_TOKEN,
            shop_id=0,
            base_url=self.GHTK_BASE_URL.rstrip("/"),
            timeout_s=float(self.UPSTREAM_TIMEOUT_S),
        )


@lru_cache
def get_settings() -> AppSettings:
    """Process-wide settings singleton."""
    return AppSettings()
