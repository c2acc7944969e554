"""Estimate arithmetic for moving jobs.

Every function here is pure. Amounts are yen; the only rounding points are the
summed time-band surcharge and the tax, both rounded once with ``round_half_up``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Sequence

from .dictionaries import (
    BASE_DISTANCE,
    DEFAULT_POINT_TIERS,
    DEFAULT_PRICING_CONFIG,
    DEFAULT_TAX_RATE,
    DEFAULT_TRUCK_BASE_PRICES,
    DEFAULT_WEIGHT_LIMITS,
    DISTANCE_PRICE_PER_KM,
    POINT_UNIT_PRICE,
    PRICING_ERROR_MESSAGES,
    PointTier,
    PricingConfig,
)
from .models.cargo import CargoItem, TimeBandSurcharge, WorkOption
from .models.estimate import EstimateComparison, EstimateResult

Number = int | float


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Non-finite values are returned unchanged so they propagate into totals.
    """
    if not math.isfinite(value):
        return value
    floored = math.floor(value)
    return floored + 1 if value - floored >= 0.5 else floored


def get_base_price(
    truck_type: str | None,
    base_prices: Mapping[str, int] = DEFAULT_TRUCK_BASE_PRICES,
) -> int:
    if not truck_type or not isinstance(truck_type, str):
        return 0
    return base_prices.get(truck_type.strip(), 0)


def calculate_total_points(items: Iterable[CargoItem]) -> Number:
    return sum((item.points * item.quantity for item in items), 0)


def calculate_total_weight(items: Iterable[CargoItem]) -> Number:
    return sum(((item.weight or 0) * item.quantity for item in items), 0)


def calculate_cargo_price(items: Iterable[CargoItem], unit_price: Number = POINT_UNIT_PRICE) -> Number:
    return calculate_total_points(items) * unit_price


def calculate_option_price(options: Iterable[WorkOption]) -> Number:
    return sum((option.price for option in options if option.selected), 0)


def calculate_distance_price(
    distance: Number,
    base_distance: Number = BASE_DISTANCE,
    price_per_km: Number = DISTANCE_PRICE_PER_KM,
) -> Number:
    if distance <= base_distance:
        return 0
    excess = distance - base_distance
    if not math.isfinite(excess):
        return excess * price_per_km
    # partial kilometres are billed as a full one
    return math.ceil(excess) * price_per_km


def calculate_time_surcharge(base_amount: Number, surcharges: Iterable[TimeBandSurcharge]) -> int:
    total: Number = 0
    for surcharge in surcharges:
        if surcharge.kind == "rate":
            total += base_amount * (surcharge.value - 1)
        else:
            total += surcharge.value
    return round_half_up(total)


def calculate_tax(amount: Number, tax_rate: float = DEFAULT_TAX_RATE) -> int:
    return round_half_up(amount * tax_rate)


def calculate_estimate(
    *,
    truck_type: str | None,
    items: Sequence[CargoItem],
    options: Sequence[WorkOption],
    distance: Number = 0,
    time_surcharges: Sequence[TimeBandSurcharge] = (),
    tax_rate: float | None = None,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
    base_prices: Mapping[str, int] = DEFAULT_TRUCK_BASE_PRICES,
) -> EstimateResult:
    """Itemise a moving estimate.

    The order matters: the time-band surcharge is computed on the sum of the
    four base components, and tax on the subtotal that includes the surcharge.
    An unknown truck type contributes a base price of 0 rather than failing.
    """
    if tax_rate is None:
        tax_rate = config.tax_rate

    base_price = get_base_price(truck_type, base_prices)
    cargo_price = calculate_cargo_price(items, config.point_unit_price)
    option_price = calculate_option_price(options)
    distance_price = calculate_distance_price(
        distance, config.base_distance, config.distance_price_per_km
    )

    subtotal_before_surcharge = base_price + cargo_price + option_price + distance_price
    time_surcharge = calculate_time_surcharge(subtotal_before_surcharge, time_surcharges)
    subtotal = subtotal_before_surcharge + time_surcharge
    tax = calculate_tax(subtotal, tax_rate)

    return EstimateResult(
        base_price=base_price,
        cargo_price=cargo_price,
        option_price=option_price,
        distance_price=distance_price,
        time_surcharge=time_surcharge,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


def calculate_discount_rate(original_price: Number, discounted_price: Number) -> int:
    if original_price == 0:
        return 0
    return round_half_up((original_price - discounted_price) / original_price * 100)


def calculate_discount_amount(original_price: Number, discount_rate: Number) -> int:
    return round_half_up(original_price * (discount_rate / 100))


def get_recommended_truck_types(
    total_points: Number,
    total_weight: Number,
    point_tiers: Sequence[PointTier] = DEFAULT_POINT_TIERS,
    weight_limits: Mapping[str, float] = DEFAULT_WEIGHT_LIMITS,
) -> list[str]:
    """Trucks suitable for both the point total and the weight total.

    Falls back to the point-based candidates when no truck satisfies both.
    """
    by_points: list[str] = []
    for tier in point_tiers:
        if total_points <= tier.max_points:
            by_points = list(tier.trucks)
            break

    by_weight = {name for name, limit in weight_limits.items() if total_weight <= limit}
    both = [name for name in by_points if name in by_weight]
    return both or by_points


def compare_estimates(estimates: Sequence[EstimateResult]) -> EstimateComparison:
    if not estimates:
        raise ValueError(PRICING_ERROR_MESSAGES["EMPTY_ESTIMATES"])

    ordered = sorted(estimates, key=lambda estimate: estimate.total)
    total_sum = sum(estimate.total for estimate in estimates)
    return EstimateComparison(
        cheapest=ordered[0],
        most_expensive=ordered[-1],
        average_price=round_half_up(total_sum / len(estimates)),
    )


def _format_non_finite(amount: float, prefix: str = "") -> str:
    if math.isnan(amount):
        return "NaN"
    return f"-{prefix}∞" if amount < 0 else f"{prefix}∞"


def format_price_jpy(amount: Number) -> str:
    if not math.isfinite(amount):
        return _format_non_finite(amount, "￥")
    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}￥{abs(int(rounded)):,}"


def format_price_number(amount: Number) -> str:
    if not math.isfinite(amount):
        return _format_non_finite(amount)
    rounded = Decimal(str(amount)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


__all__ = [
    "round_half_up",
    "get_base_price",
    "calculate_total_points",
    "calculate_total_weight",
    "calculate_cargo_price",
    "calculate_option_price",
    "calculate_distance_price",
    "calculate_time_surcharge",
    "calculate_tax",
    "calculate_estimate",
    "calculate_discount_rate",
    "calculate_discount_amount",
    "get_recommended_truck_types",
    "compare_estimates",
    "format_price_jpy",
    "format_price_number",
]
