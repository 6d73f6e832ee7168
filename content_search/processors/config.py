"""Sampling configuration: an immutable snapshot behind one swappable reference."""

import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from content_search.errors import ConfigurationError
from content_search.utils.config import settings
from content_search.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SamplingConfig:
    """How far to over-fetch before sampling, and an optional hard ceiling."""

    amplification_factor: int = 4
    max_fetch_size: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.amplification_factor, bool) or not isinstance(
            self.amplification_factor, int
        ):
            raise ConfigurationError(
                f"amplification_factor must be an integer, got {self.amplification_factor!r}"
            )
        if self.amplification_factor < 1:
            raise ConfigurationError(
                f"amplification_factor must be >= 1, got {self.amplification_factor}"
            )
        if self.max_fetch_size is not None and (
            isinstance(self.max_fetch_size, bool)
            or not isinstance(self.max_fetch_size, int)
            or self.max_fetch_size < 0
        ):
            raise ConfigurationError(
                f"max_fetch_size must be a non-negative integer, got {self.max_fetch_size!r}"
            )

    def fetch_size(self, requested: int) -> int:
        """Amplified fetch size for a page of *requested* items."""
        amplified = requested * self.amplification_factor
        if self.max_fetch_size is not None:
            amplified = min(amplified, self.max_fetch_size)
        return amplified

    @classmethod
    def from_settings(cls) -> "SamplingConfig":
        return cls(
            amplification_factor=settings.sampling_amplification_factor,
            max_fetch_size=settings.sampling_max_fetch_size,
        )

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "SamplingConfig":
        """Build a snapshot from an admin property map (values may be strings).

        A missing ``amplification_factor`` falls back to the default; a
        missing, ``None`` or blank ``max_fetch_size`` means no ceiling.
        """
        factor = _parse_int(properties.get("amplification_factor"), "amplification_factor")
        cap = _parse_int(properties.get("max_fetch_size"), "max_fetch_size")
        if factor is None:
            return cls(max_fetch_size=cap)
        return cls(amplification_factor=factor, max_fetch_size=cap)


class SamplingConfigHolder:
    """Holds the current :class:`SamplingConfig`.

    Readers take one reference to a frozen snapshot and use it for the whole
    request; writers build a complete new snapshot and swap it in, so a
    reader can never see a factor from one config paired with a cap from
    another.
    """

    def __init__(self, config: Optional[SamplingConfig] = None):
        self._config = config or SamplingConfig()
        self._write_lock = threading.Lock()

    @property
    def current(self) -> SamplingConfig:
        return self._config

    def replace(self, config: SamplingConfig) -> SamplingConfig:
        """Swap in *config*; returns the snapshot it replaced."""
        with self._write_lock:
            previous, self._config = self._config, config
        log.info(
            "Sampling config updated: amplification_factor=%d, max_fetch_size=%s",
            config.amplification_factor,
            config.max_fetch_size,
        )
        return previous

    def reconfigure(self, properties: Mapping[str, Any]) -> SamplingConfig:
        """Apply an administrative reconfiguration event.

        The new snapshot is validated before the swap; an invalid event
        raises :class:`ConfigurationError` and leaves the current one in place.
        """
        config = SamplingConfig.from_properties(properties)
        self.replace(config)
        return config


def _parse_int(raw: Any, name: str) -> Optional[int]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} is not an integer: {raw!r}") from exc
