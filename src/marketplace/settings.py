"""Runtime settings for the marketplace.

Settings are read once from the environment (a local ``.env`` file is
honoured) and handed explicitly to the listing and cart flows.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _get_bool(name: str, fallback: bool = False) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return fallback
    return raw_value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class DistributionSettings:
    order_cycles_enabled: bool = False


def load_settings() -> DistributionSettings:
    return DistributionSettings(
        order_cycles_enabled=_get_bool("MARKETPLACE_ORDER_CYCLES_ENABLED"),
    )


@lru_cache(maxsize=1)
def get_settings() -> DistributionSettings:
    """FastAPI dependency returning the process-wide settings."""
    return load_settings()
