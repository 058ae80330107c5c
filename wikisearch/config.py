"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_ENDPOINT = "https://en.wikipedia.org/w/api.php"
DEFAULT_USER_AGENT = "wikisearch/0.1 (+https://en.wikipedia.org/w/api.php)"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class ProxyConfig(BaseModel):
    """HTTP proxy that search requests are routed through."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    scheme: Literal["http", "https", "socks5"] = "http"
    username: str | None = None
    password: SecretStr | None = None

    @field_validator("username", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _password_needs_username(self) -> "ProxyConfig":
        if self.password is not None and self.username is None:
            raise ValueError("A proxy password requires a username.")
        return self

    @property
    def url(self) -> str:
        credentials = ""
        if self.username is not None:
            credentials = quote(self.username, safe="")
            if self.password is not None:
                credentials += ":" + quote(self.password.get_secret_value(), safe="")
            credentials += "@"
        return f"{self.scheme}://{credentials}{self.host}:{self.port}"

    @classmethod
    def from_url(cls, url: str) -> "ProxyConfig":
        parsed = httpx.URL(url)
        # httpx drops default ports from the URL
        port = parsed.port or _DEFAULT_PORTS.get(parsed.scheme)
        if not parsed.host or port is None:
            raise ValueError(f"Proxy URL must include a host and a port: {url!r}")
        username = parsed.username or None
        password = parsed.password or None
        return cls(
            host=parsed.host,
            port=port,
            scheme=parsed.scheme,
            username=username,
            password=password,
        )


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WIKISEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api_endpoint: HttpUrl = Field(default=DEFAULT_API_ENDPOINT)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    request_timeout_seconds: float | None = Field(default=None, gt=0)
    proxy: ProxyConfig | None = None
    log_level: str = "INFO"


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "DEFAULT_API_ENDPOINT",
    "ProxyConfig",
    "SearchSettings",
    "get_settings",
]
