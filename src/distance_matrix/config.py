import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Google
    google_maps_api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    api_endpoint: str = os.getenv(
        "DISTANCE_MATRIX_ENDPOINT",
        "https://maps.googleapis.com/maps/api/distancematrix/json",
    )
    request_timeout: float = float(os.getenv("DISTANCE_MATRIX_TIMEOUT", "15"))

    # Cache
    enable_cache: bool = os.getenv("DISTANCE_MATRIX_ENABLE_CACHE", "true").lower() == "true"
    cache_ttl: int = int(os.getenv("DISTANCE_MATRIX_CACHE_TTL", "86400"))  # 24 hours default
    cache_backend: str = os.getenv("DISTANCE_MATRIX_CACHE_BACKEND", "redis")  # or "memory"
    cache_prefix: str = "google_distance_matrix_"

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        validate_cache_ttl(self.cache_ttl)

        if self.cache_backend not in ("redis", "memory"):
            raise ValueError(
                f"DISTANCE_MATRIX_CACHE_BACKEND must be 'redis' or 'memory', got {self.cache_backend!r}"
            )

        if self.request_timeout <= 0:
            raise ValueError("DISTANCE_MATRIX_TIMEOUT must be positive")


MIN_CACHE_TTL = 300
CACHE_TTL_STEP = 300


def validate_cache_ttl(ttl: int) -> int:
    """Check a cache TTL against the allowed range (>= 300, in steps of 300).

    Returns:
        The TTL unchanged

    Raises:
        ValueError: If the TTL is out of range or not a multiple of the step
    """
    if ttl < MIN_CACHE_TTL or ttl % CACHE_TTL_STEP != 0:
        raise ValueError(
            f"Cache TTL must be at least {MIN_CACHE_TTL} seconds and a multiple of "
            f"{CACHE_TTL_STEP}, got {ttl}"
        )
    return ttl


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
