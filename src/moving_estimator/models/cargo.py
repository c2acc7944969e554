from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CargoItem(BaseModel):
    model_config = {"frozen": True}

    name: str
    points: int | float = Field(description="Points per unit (relative size/difficulty)")
    weight: int | float | None = Field(default=None, description="Weight per unit in kg")
    quantity: int | float = 1


class WorkOption(BaseModel):
    model_config = {"frozen": True}

    name: str
    price: int | float
    selected: bool = False


class TimeBandSurcharge(BaseModel):
    """Surcharge rule scoped to a time-of-day window.

    ``kind == "rate"`` multiplies the pre-surcharge subtotal by ``value``
    (only the excess over 1.0 is added); ``kind == "fixed"`` adds ``value``.
    """

    model_config = {"frozen": True}

    id: str
    start: str
    end: str
    kind: Literal["rate", "fixed"]
    value: int | float


__all__ = ["CargoItem", "WorkOption", "TimeBandSurcharge"]
