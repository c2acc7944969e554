from __future__ import annotations

from pydantic import BaseModel, Field


class TruckTypeDefinition(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}

    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    base_price: int = Field(alias="basePrice")
    capacity_kg: int | float = Field(alias="capacityKg")
    max_points: int | float = Field(alias="maxPoints")
    sort_order: int = Field(default=0, alias="sortOrder")

    @property
    def label(self) -> str:
        return self.display_name or self.name


__all__ = ["TruckTypeDefinition"]
