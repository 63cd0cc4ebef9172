from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class CoreAppConfigError(ValueError):
    """Raised when core app configuration is invalid."""


@dataclass(frozen=True)
class CoreAppConfig:
    env_mode: str
    poll_interval_seconds: float = 10.0
    telemetry_enabled: bool = False
    log_level: str = "INFO"


def load_core_app_config(env_file: str | None = None) -> CoreAppConfig:
    load_dotenv(env_file)

    env_mode = os.getenv("LEDGERX_ENV", "dev").strip().lower()
    raw_interval = os.getenv("LEDGERX_POLL_INTERVAL_SECONDS", "10")
    try:
        poll_interval = float(raw_interval)
    except ValueError as exc:
        raise CoreAppConfigError(f"Invalid LEDGERX_POLL_INTERVAL_SECONDS: {raw_interval!r}") from exc
    if poll_interval <= 0:
        raise CoreAppConfigError(f"Invalid LEDGERX_POLL_INTERVAL_SECONDS: expected > 0, got {poll_interval}")

    telemetry_enabled = os.getenv("LEDGERX_TELEMETRY_ENABLED", "0").strip().lower() in {"1", "true", "yes", "on"}

    return CoreAppConfig(
        env_mode=env_mode,
        poll_interval_seconds=poll_interval,
        telemetry_enabled=telemetry_enabled,
        log_level=os.getenv("LEDGERX_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
