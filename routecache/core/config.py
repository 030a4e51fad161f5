"""Cache configuration (settings and environment).

Single source of truth for namespace, TTL, key hashing and the Redis
connection target. Uses pydantic-settings with .env support.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routecache.core.constants import (
    DEFAULT_KEY_HASH,
    DEFAULT_NAMESPACE,
    DEFAULT_TTL_SECONDS,
    KEY_HASH_ALGORITHMS,
)


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    All settings have defaults; validate_cache rejects an empty namespace,
    a non-positive default TTL and unknown key hash names.
    """

    app_name: str = "routecache"
    debug: bool = False

    # Keys: "<namespace>:<name or hash>"
    cache_namespace: str = DEFAULT_NAMESPACE
    cache_default_ttl: int = DEFAULT_TTL_SECONDS
    # "rolling32" keeps keys short; "sha256" trades length for fewer collisions.
    cache_key_hash: str = DEFAULT_KEY_HASH

    # Redis: redis_url wins over host/port/db when set.
    redis_url: str | None = None
    redis_host: str = "127.0.0.1"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache(self) -> "Settings":
        """Validate namespace, default TTL and key hash name."""
        if not self.cache_namespace:
            raise ValueError("CACHE_NAMESPACE must be a non-empty string")
        if self.cache_default_ttl <= 0:
            raise ValueError(
                f"CACHE_DEFAULT_TTL must be positive, got: {self.cache_default_ttl}"
            )
        if self.cache_key_hash not in KEY_HASH_ALGORITHMS:
            raise ValueError(
                f"CACHE_KEY_HASH must be one of {sorted(KEY_HASH_ALGORITHMS)}, "
                f"got: {self.cache_key_hash!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() after changing env vars so the
    next call picks up the new values.
    """
    return Settings()
