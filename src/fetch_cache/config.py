import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> frozenset[str]:
    """Parse a comma separated list of origins, ignoring blanks."""
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Origins
    allowed_origins: frozenset[str] = _split_origins(
        os.getenv("ALLOWED_ORIGINS", "https://paulgraham.com")
    )
    origin_timeout: float = float(os.getenv("ORIGIN_TIMEOUT", "30.0"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "86400"))  # 24 hours default

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "debug")
    log_format: str = os.getenv("LOG_FORMAT", "text")  # or "json"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Map InvalidInput/OriginNotAllowed/FetchFailed to 400/403/502 instead of 404
    distinct_error_status: bool = os.getenv("DISTINCT_ERROR_STATUS", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be a positive number of seconds, got {self.cache_ttl}")

        if self.origin_timeout <= 0:
            raise ValueError(
                f"ORIGIN_TIMEOUT must be a positive number of seconds, got {self.origin_timeout}"
            )

        if self.log_format not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be one of ['text', 'json'], got {self.log_format}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
