"""Reader configuration.

ReaderConfig is a frozen dataclass; override only what you need::

    config = ReaderConfig(strategy="line")
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

from .errors import ConfigurationError

STRATEGIES = ("auto", "once", "line")


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Settings for sources built by ``AutoSource`` and ``InputContext``."""

    # "auto" probes the provider, "once" buffers everything, "line" reads lazily
    strategy: str = "auto"

    # Level applied by the CLI; the library itself never configures logging
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"unknown source strategy {self.strategy!r}; expected one of {', '.join(STRATEGIES)}"
            )

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> ReaderConfig:
        """Build from ``PROCIN_STRATEGY`` / ``PROCIN_LOG_LEVEL``."""
        env = os.environ if environ is None else environ
        return ReaderConfig(
            strategy=env.get("PROCIN_STRATEGY", "auto"),
            log_level=env.get("PROCIN_LOG_LEVEL", "WARNING").upper(),
        )

    @staticmethod
    def from_json_file(path: str) -> ReaderConfig:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        try:
            return ReaderConfig(**data)
        except TypeError as exc:
            raise ConfigurationError(f"invalid config file {path!r}: {exc}") from exc
