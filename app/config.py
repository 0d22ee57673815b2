"""Application settings and reference-data loading.

Process settings come from the environment (REMIT_ prefix). Business
configuration (compliance thresholds, fee schedule, fallback exchange
rates) lives in JSON files under the data directory and falls back to
model defaults when a file is absent.
"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models import ComplianceConfig, FeeSettings

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

# Used when neither the store nor the data directory has rates for a day.
FALLBACK_RATES = {"NZD_WST": 2.1, "NZD_AUD": 0.93, "NZD_USD": 0.61}


class AppSettings(BaseSettings):
    """Process-level settings, overridable via REMIT_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="REMIT_", extra="ignore")

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"


def _load_json(path: Path) -> Optional[Any]:
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_compliance_config(data_dir: Path) -> ComplianceConfig:
    raw = _load_json(data_dir / "rules_config.json")
    return ComplianceConfig(**raw) if raw else ComplianceConfig()


def load_fee_settings(data_dir: Path) -> FeeSettings:
    raw = _load_json(data_dir / "fee_settings.json")
    return FeeSettings(**raw) if raw else FeeSettings()


def load_default_rates(data_dir: Path) -> dict[str, float]:
    raw = _load_json(data_dir / "default_rates.json")
    return {**FALLBACK_RATES, **raw} if raw else dict(FALLBACK_RATES)
