"""Configuration management for finance engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Engine settings loaded from environment."""

    engine_version: str
    strict_proration: bool
    log_level: str

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("FINANCE_ENGINE_VERSION", "1.0.0"),
            strict_proration=os.getenv(
                "FINANCE_ENGINE_STRICT_PRORATION", "false"
            ).lower() == "true",
            log_level=os.getenv("FINANCE_ENGINE_LOG_LEVEL", "WARNING").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
