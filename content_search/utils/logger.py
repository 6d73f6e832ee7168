"""Structured logging and per-search analytics logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger (creates handlers only once per name)."""
    from content_search.utils.config import settings

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    effective_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(effective_level)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    # Optional file handler (LOG_FILE="" disables it)
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt))
        logger.addHandler(fh)

    return logger


def log_search(
    processor: str,
    terms: str,
    requested: int,
    returned: int,
    total: int,
    response_time_ms: float,
) -> None:
    """Append a single search record to the JSONL analytics file."""
    from content_search.utils.config import settings

    if not settings.analytics_file:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "processor": processor,
        "terms": terms,
        "requested": requested,
        "returned": returned,
        "total": total,
        "response_time_ms": round(response_time_ms, 1),
    }

    path = Path(settings.analytics_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(record) + "\n")
