import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Host settings loaded from environment variables."""

    # Listener
    address: str = os.getenv("HOST_ADDRESS", "127.0.0.1")
    port: int = int(os.getenv("HOST_PORT", "63578"))

    # Auth (unset disables token checks)
    auth_token: str | None = os.getenv("HOST_AUTH_TOKEN") or None

    # Cache: default time-to-live in seconds, None = entries never expire
    cache_ttl: float | None = _optional_float(os.getenv("SERVICE_CACHE_TTL"))

    # Output
    output_on_listen: bool = os.getenv("HOST_OUTPUT_ON_LISTEN", "true").lower() == "true"
    silent: bool = os.getenv("HOST_SILENT", "false").lower() == "true"
    log_level: str = os.getenv("HOST_LOG_LEVEL", "INFO")

    @property
    def url(self) -> str:
        """The URL a client uses to reach this host."""
        return f"http://{self.address}:{self.port}"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.port <= 65535:
            raise ValueError(f"HOST_PORT must be between 0 and 65535, got {self.port}")

        if self.cache_ttl is not None and self.cache_ttl <= 0:
            raise ValueError(f"SERVICE_CACHE_TTL must be positive, got {self.cache_ttl}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the package logger once."""
    logger = logging.getLogger("service_host")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
