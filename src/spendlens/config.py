"""Runtime settings, read from ``SPENDLENS_*`` environment variables."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from spendlens.domain.errors import ValidationError

DEFAULT_PROVIDERS = ("starling", "amex")


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    database_path: Optional[str] = None
    timezone: str = "UTC"
    providers: tuple[str, ...] = field(default=DEFAULT_PROVIDERS)
    mock_seed: Optional[int] = None
    log_level: str = "WARNING"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the environment.

    Raises:
        ValidationError: If ``SPENDLENS_MOCK_SEED`` is not an integer
    """
    env = os.environ if environ is None else environ

    providers = DEFAULT_PROVIDERS
    raw_providers = env.get("SPENDLENS_PROVIDERS")
    if raw_providers is not None:
        providers = tuple(p.strip().lower() for p in raw_providers.split(",") if p.strip())

    seed = None
    raw_seed = env.get("SPENDLENS_MOCK_SEED")
    if raw_seed:
        try:
            seed = int(raw_seed)
        except ValueError:
            raise ValidationError(f"SPENDLENS_MOCK_SEED must be an integer, got '{raw_seed}'")

    return Settings(
        database_path=env.get("SPENDLENS_DB_PATH") or None,
        timezone=env.get("SPENDLENS_TIMEZONE") or "UTC",
        providers=providers,
        mock_seed=seed,
        log_level=env.get("SPENDLENS_LOG_LEVEL") or "WARNING",
    )
