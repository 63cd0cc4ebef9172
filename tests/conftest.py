from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def _ledgerx_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("LEDGERX_TELEMETRY_ENABLED", "0")
    for name in ("LEDGERX_ENV", "LEDGERX_TENANT", "LEDGERX_HOSTNAME", "LEDGERX_RETRIES", "LEDGERX_POLL_INTERVAL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
