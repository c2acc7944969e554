from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from pydantic import BaseModel, model_validator

from .models.truck import TruckTypeDefinition


class PricingConfig(BaseModel):
    model_config = {"frozen": True}

    point_unit_price: int | float = 500
    base_distance: int | float = 10
    distance_price_per_km: int | float = 50
    tax_rate: float = 0.1

    @model_validator(mode="after")
    def _check_ranges(self) -> "PricingConfig":
        if self.point_unit_price <= 0:
            raise ValueError("point_unit_price must be positive")
        if not 0 <= self.tax_rate <= 1:
            raise ValueError("tax_rate must be between 0 and 1")
        return self


@dataclass(frozen=True)
class PointTier:
    """Trucks suggested when the total points do not exceed ``max_points``."""

    max_points: float
    trucks: tuple[str, ...]


DEFAULT_PRICING_CONFIG = PricingConfig()

POINT_UNIT_PRICE = DEFAULT_PRICING_CONFIG.point_unit_price
BASE_DISTANCE = DEFAULT_PRICING_CONFIG.base_distance
DISTANCE_PRICE_PER_KM = DEFAULT_PRICING_CONFIG.distance_price_per_km
DEFAULT_TAX_RATE = DEFAULT_PRICING_CONFIG.tax_rate
REDUCED_TAX_RATE = 0.08


DEFAULT_TRUCK_TYPES: Sequence[TruckTypeDefinition] = (
    TruckTypeDefinition(
        name="軽トラック",
        display_name="軽トラック",
        base_price=15000,
        capacity_kg=350,
        max_points=50,
        sort_order=10,
    ),
    TruckTypeDefinition(
        name="2tショート",
        display_name="2トンショート",
        base_price=25000,
        capacity_kg=1500,
        max_points=100,
        sort_order=20,
    ),
    TruckTypeDefinition(
        name="2t",
        display_name="2トン",
        base_price=30000,
        capacity_kg=2000,
        max_points=200,
        sort_order=30,
    ),
    TruckTypeDefinition(
        name="3t",
        display_name="3トン",
        base_price=40000,
        capacity_kg=3000,
        max_points=350,
        sort_order=40,
    ),
    TruckTypeDefinition(
        name="4t",
        display_name="4トン",
        base_price=50000,
        capacity_kg=4000,
        max_points=500,
        sort_order=50,
    ),
)


def build_base_prices(truck_types: Sequence[TruckTypeDefinition]) -> Mapping[str, int]:
    return MappingProxyType({truck.name: truck.base_price for truck in truck_types})


def build_point_tiers(truck_types: Sequence[TruckTypeDefinition]) -> tuple[PointTier, ...]:
    """Each truck covers up to its ``max_points`` together with the next size up.

    A trailing unbounded tier holds the largest truck alone.
    """
    ordered = sorted(truck_types, key=lambda truck: truck.sort_order)
    tiers: list[PointTier] = []
    for index, truck in enumerate(ordered):
        trucks = tuple(t.name for t in ordered[index : index + 2])
        tiers.append(PointTier(max_points=truck.max_points, trucks=trucks))
    if ordered:
        tiers.append(PointTier(max_points=math.inf, trucks=(ordered[-1].name,)))
    return tuple(tiers)


def build_weight_limits(truck_types: Sequence[TruckTypeDefinition]) -> Mapping[str, float]:
    ordered = sorted(truck_types, key=lambda truck: truck.sort_order)
    return MappingProxyType({truck.name: truck.capacity_kg for truck in ordered})


DEFAULT_TRUCK_BASE_PRICES: Mapping[str, int] = build_base_prices(DEFAULT_TRUCK_TYPES)
DEFAULT_POINT_TIERS: Sequence[PointTier] = build_point_tiers(DEFAULT_TRUCK_TYPES)
DEFAULT_WEIGHT_LIMITS: Mapping[str, float] = build_weight_limits(DEFAULT_TRUCK_TYPES)


PRICING_VALIDATION: Mapping[str, int] = MappingProxyType(
    {
        "MAX_POINTS": 9999,
        "MAX_DISTANCE": 1000,
        "MAX_PRICE": 1_000_000,
        "MIN_PRICE": 0,
    }
)


PRICING_ERROR_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "INVALID_TRUCK_TYPE": "トラック種別が無効です",
        "INVALID_POINTS": "ポイント数が無効です（0以上9999以下）",
        "INVALID_DISTANCE": "距離が無効です（0以上1000km以下）",
        "INVALID_TAX_RATE": "税率が無効です（0以上1以下）",
        "EMPTY_ITEMS": "荷物アイテムが指定されていません",
        "EMPTY_ESTIMATES": "見積もりデータが空です",
    }
)


__all__ = [
    "PricingConfig",
    "PointTier",
    "DEFAULT_PRICING_CONFIG",
    "POINT_UNIT_PRICE",
    "BASE_DISTANCE",
    "DISTANCE_PRICE_PER_KM",
    "DEFAULT_TAX_RATE",
    "REDUCED_TAX_RATE",
    "DEFAULT_TRUCK_TYPES",
    "DEFAULT_TRUCK_BASE_PRICES",
    "DEFAULT_POINT_TIERS",
    "DEFAULT_WEIGHT_LIMITS",
    "PRICING_VALIDATION",
    "PRICING_ERROR_MESSAGES",
    "build_base_prices",
    "build_point_tiers",
    "build_weight_limits",
]
