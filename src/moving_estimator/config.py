from __future__ import annotations

import os
from typing import Mapping

from .dictionaries import PricingConfig

_ENV_FIELDS = {
    "POINT_UNIT_PRICE": "point_unit_price",
    "BASE_DISTANCE": "base_distance",
    "DISTANCE_PRICE_PER_KM": "distance_price_per_km",
    "TAX_RATE": "tax_rate",
}


def load_pricing_config(environ: Mapping[str, str] | None = None) -> PricingConfig:
    """Build the pricing config, letting environment variables override defaults."""
    env = os.environ if environ is None else environ
    overrides = {field: env[key] for key, field in _ENV_FIELDS.items() if env.get(key)}
    return PricingConfig.model_validate(overrides)


__all__ = ["load_pricing_config"]
