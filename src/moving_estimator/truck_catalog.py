from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from .dictionaries import (
    DEFAULT_TRUCK_TYPES,
    PointTier,
    build_base_prices,
    build_point_tiers,
    build_weight_limits,
)
from .models.truck import TruckTypeDefinition
from .pricing import get_base_price, get_recommended_truck_types

logger = logging.getLogger(__name__)


class TruckTypeCatalog:
    """Read-only view over the truck types known at start-up."""

    def __init__(self, truck_types: Sequence[TruckTypeDefinition] = DEFAULT_TRUCK_TYPES) -> None:
        if not truck_types:
            raise ValueError("Truck type catalog must contain at least one truck type")
        self._truck_types = tuple(sorted(truck_types, key=lambda truck: truck.sort_order))
        self._base_prices = build_base_prices(self._truck_types)
        self._point_tiers = build_point_tiers(self._truck_types)
        self._weight_limits = build_weight_limits(self._truck_types)

    @property
    def truck_types(self) -> tuple[TruckTypeDefinition, ...]:
        return self._truck_types

    @property
    def base_prices(self) -> Mapping[str, int]:
        return self._base_prices

    @property
    def point_tiers(self) -> tuple[PointTier, ...]:
        return self._point_tiers

    @property
    def weight_limits(self) -> Mapping[str, float]:
        return self._weight_limits

    def names(self) -> list[str]:
        return [truck.name for truck in self._truck_types]

    def contains(self, truck_type: str | None) -> bool:
        return bool(truck_type) and truck_type.strip() in self._base_prices

    def base_price(self, truck_type: str | None) -> int:
        return get_base_price(truck_type, self._base_prices)

    def recommended_type(self, points: float) -> str:
        """Smallest truck whose point capacity covers ``points``, else the largest."""
        for truck in self._truck_types:
            if points <= truck.max_points:
                return truck.name
        return self._truck_types[-1].name

    def recommend(self, total_points: float, total_weight: float) -> list[str]:
        return get_recommended_truck_types(
            total_points, total_weight, self._point_tiers, self._weight_limits
        )


class TruckTypeRepository(Protocol):
    def load(self) -> TruckTypeCatalog:
        ...


class StaticTruckTypeRepository:
    def __init__(self, truck_types: Sequence[TruckTypeDefinition] = DEFAULT_TRUCK_TYPES) -> None:
        self._truck_types = tuple(truck_types)

    def load(self) -> TruckTypeCatalog:
        return TruckTypeCatalog(self._truck_types)


class LocalTruckTypeRepository:
    """Loads truck types from a JSON array of objects (camelCase or snake_case keys)."""

    def __init__(self, *, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> TruckTypeCatalog:
        if not self._file_path.exists():
            raise FileNotFoundError(f"Truck type catalog not found: {self._file_path}")
        with self._file_path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
        if isinstance(data, dict):
            data = data.get("truckTypes", data.get("truck_types", []))
        truck_types = [TruckTypeDefinition.model_validate(entry) for entry in data]
        logger.info(
            "Loaded truck type catalog",
            extra={"source": str(self._file_path), "count": len(truck_types)},
        )
        return TruckTypeCatalog(truck_types)


__all__ = [
    "TruckTypeCatalog",
    "TruckTypeRepository",
    "StaticTruckTypeRepository",
    "LocalTruckTypeRepository",
]
