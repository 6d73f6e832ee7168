"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_int(raw: Optional[str]) -> Optional[int]:
    """Parse an env value that may be unset or blank."""
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars."""

    # --- Solr --------------------------------------------------------------
    solr_url: str = field(
        default_factory=lambda: os.getenv("SOLR_URL", "http://localhost:8983/solr/content")
    )
    solr_timeout: float = field(default_factory=lambda: float(os.getenv("SOLR_TIMEOUT", "10.0")))
    solr_max_results: int = field(
        default_factory=lambda: int(os.getenv("SOLR_MAX_RESULTS", "100"))
    )

    # --- Redis (content repository) ----------------------------------------
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))

    # --- Paging / sampling -------------------------------------------------
    default_page_size: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_PAGE_SIZE", "25"))
    )
    sampling_amplification_factor: int = field(
        default_factory=lambda: int(os.getenv("SAMPLING_AMPLIFICATION_FACTOR", "4"))
    )
    sampling_max_fetch_size: Optional[int] = field(
        default_factory=lambda: _optional_int(os.getenv("SAMPLING_MAX_FETCH_SIZE"))
    )

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(
        default_factory=lambda: os.getenv("LOG_FILE", "logs/content_search.log")
    )
    analytics_file: str = field(
        default_factory=lambda: os.getenv("ANALYTICS_FILE", "logs/search_analytics.jsonl")
    )


# Module-level singleton -- import this everywhere.
settings = Settings()
