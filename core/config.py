"""Runtime settings for the CRM rules and its batch jobs.

APP_ENV picks a profile (log level, sweep batch size). The renewal windows
and every profile value can be overridden one by one from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Immutable application settings resolved from environment."""

    database_url: str
    app_env: str = "dev"
    log_level: str = "INFO"

    # Renewal windows (days left before end date)
    expiring_soon_days: int = 7
    renewal_window_days: int = 30

    # Batch jobs
    sweep_batch_size: int = 50

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "sweep_batch_size": 10,
    },
    "staging": {
        "log_level": "INFO",
        "sweep_batch_size": 50,
    },
    "production": {
        "log_level": "WARNING",
        "sweep_batch_size": 100,
    },
}


def get_database_url() -> str:
    """Resolve database URL from the DATABASE_URL env var or a local default."""
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url
    return "postgresql+psycopg2://localhost:5432/coachdesk"


def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        database_url=get_database_url(),
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        expiring_soon_days=int(os.getenv("EXPIRING_SOON_DAYS", "7")),
        renewal_window_days=int(os.getenv("RENEWAL_WINDOW_DAYS", "30")),
        sweep_batch_size=int(os.getenv("SWEEP_BATCH_SIZE", str(profile.get("sweep_batch_size", 50)))),
    )
