from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RAIKU_", extra="ignore")

    default_seed: str = "RAIKU-DEMO-SEED-001"
    default_max_rounds: int = 20
    # Upper bound accepted by the HTTP API; the CLI is not capped.
    max_rounds_limit: int = 1000

    log_json: bool = False
