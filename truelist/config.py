from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, TypeAdapter
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.truelist.io"
DEFAULT_CACHE_PREFIX = "truelist:"
DEFAULT_CONFIG_FILE = "truelist.yml"


class Settings(BaseSettings):
    """Client settings from TRUELIST_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRUELIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    api_key: str = Field(default="")

    # Transport
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(default=10.0)
    max_retries: int = Field(default=2)
    retry_delay: float = Field(default=0.1)  # Seconds between attempts

    # Policy
    allow_risky: bool = Field(default=True)
    raise_on_error: bool = Field(default=False)

    # Cache
    cache_enabled: bool = Field(default=False)
    cache_ttl: int = Field(default=3600)
    cache_prefix: str = Field(default=DEFAULT_CACHE_PREFIX)
    redis_url: str = Field(default="")  # Empty means in-process cache

    # Application
    config_file: str = Field(default=DEFAULT_CONFIG_FILE)
    debug: bool = Field(default=False)


@dataclass(frozen=True)
class CacheConfig:
    """Cache-aside settings for verification results."""

    enabled: bool = False
    ttl: int = 3600
    prefix: str = DEFAULT_CACHE_PREFIX


@dataclass(frozen=True)
class TruelistConfig:
    """Explicit configuration handed to the client at construction."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    allow_risky: bool = True
    raise_on_error: bool = False
    cache: CacheConfig = field(default_factory=CacheConfig)
    max_retries: int = 2
    retry_delay: float = 0.1

    @property
    def endpoint(self) -> str:
        """Full URL of the verification endpoint."""
        return f"{self.base_url.rstrip('/')}/api/v1/verify"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        data: dict[str, Any] | None = None,
    ) -> "TruelistConfig":
        """
        Combine environment settings with values from the YAML file.

        Environment variables that were explicitly set win over the file;
        the file wins over built-in defaults.
        """
        data = data or {}
        cache_data = data.get("cache") or {}

        def pick(name: str, file_value: Any) -> Any:
            if name in settings.model_fields_set or file_value is None:
                return getattr(settings, name)
            # File values get the same coercion as env vars ("false" -> False)
            annotation = Settings.model_fields[name].annotation
            return TypeAdapter(annotation).validate_python(file_value)

        return cls(
            api_key=pick("api_key", data.get("api_key")) or None,
            base_url=pick("base_url", data.get("base_url")),
            timeout=pick("timeout", data.get("timeout")),
            allow_risky=pick("allow_risky", data.get("allow_risky")),
            raise_on_error=pick("raise_on_error", data.get("raise_on_error")),
            max_retries=pick("max_retries", data.get("max_retries")),
            retry_delay=pick("retry_delay", data.get("retry_delay")),
            cache=CacheConfig(
                enabled=pick("cache_enabled", cache_data.get("enabled")),
                ttl=pick("cache_ttl", cache_data.get("ttl")),
                prefix=pick("cache_prefix", cache_data.get("prefix")),
            ),
        )


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Read the optional YAML config file; a missing file yields an empty mapping."""
    config_path = Path(path)
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        return {}
    # Allow the settings to live under a top-level "truelist" key
    if isinstance(data.get("truelist"), dict):
        data = data["truelist"]
    return data


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> TruelistConfig:
    """Get cached client configuration from .env, environment and truelist.yml."""
    settings = get_settings()
    return TruelistConfig.from_settings(settings, load_yaml_config(settings.config_file))
