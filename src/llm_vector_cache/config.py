import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    store_backend: str = os.getenv("STORE_BACKEND", "redis")

    # Cache
    cache_similarity_threshold: float = float(os.getenv("CACHE_SIMILARITY_THRESHOLD", "0.95"))
    cache_ttl_hours: float = float(os.getenv("CACHE_TTL_HOURS", "24"))
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "llm_cache:")

    # Provider selection
    llm_provider_active: str = os.getenv("LLM_PROVIDER_ACTIVE", "openai")
    provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "30"))

    # OpenAI
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    openai_embedding_model: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-ada-002")
    openai_chat_model: str = os.getenv("OPENAI_CHAT_MODEL", "gpt-3.5-turbo")

    # Ollama (only registered as available when a base URL is configured)
    ollama_base_url: str | None = os.getenv("OLLAMA_BASE_URL")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "qwen2.5-coder:3b")
    ollama_dimension: int = int(os.getenv("OLLAMA_DIMENSION", "4096"))
    ollama_hash_fallback: bool = _env_bool("OLLAMA_HASH_FALLBACK", "true")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def cache_ttl_seconds(self) -> int:
        """Entry time-to-live in whole seconds."""
        return int(self.cache_ttl_hours * 3600)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not -1.0 <= self.cache_similarity_threshold <= 1.0:
            raise ValueError("CACHE_SIMILARITY_THRESHOLD must be between -1 and 1 for cosine similarity")

        if self.cache_ttl_hours <= 0:
            raise ValueError(f"CACHE_TTL_HOURS must be positive, got {self.cache_ttl_hours}")

        if self.provider_timeout <= 0:
            raise ValueError(f"PROVIDER_TIMEOUT must be positive, got {self.provider_timeout}")

        if self.ollama_dimension <= 0:
            raise ValueError(f"OLLAMA_DIMENSION must be positive, got {self.ollama_dimension}")

        if self.store_backend not in ("redis", "memory"):
            raise ValueError(f"STORE_BACKEND must be one of ['redis', 'memory'], got {self.store_backend!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance.

    The client connects lazily on the first command, so creating it never
    fails even when Redis is down.
    """
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
        socket_timeout=5,
    )


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and services."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
