from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field

from .cargo import CargoItem, TimeBandSurcharge, WorkOption


class EstimateRequest(BaseModel):
    model_config = {"frozen": True}

    truck_type: str | None = None
    items: Sequence[CargoItem] = Field(default_factory=tuple)
    options: Sequence[WorkOption] = Field(default_factory=tuple)
    distance: int | float = 0
    time_surcharges: Sequence[TimeBandSurcharge] = Field(default_factory=tuple)
    tax_rate: float | None = Field(default=None, description="Falls back to the configured tax rate")


class EstimateResult(BaseModel):
    model_config = {"frozen": True}

    base_price: int | float
    cargo_price: int | float
    option_price: int | float
    distance_price: int | float
    time_surcharge: int | float
    subtotal: int | float
    tax: int | float
    total: int | float


class EstimateComparison(BaseModel):
    model_config = {"frozen": True}

    cheapest: EstimateResult
    most_expensive: EstimateResult
    average_price: int | float


__all__ = ["EstimateRequest", "EstimateResult", "EstimateComparison"]
