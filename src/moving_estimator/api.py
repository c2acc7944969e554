from __future__ import annotations

import logging
import uuid
from datetime import time
from typing import Sequence

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .calculator import EstimateCalculator
from .logging_config import set_request_id
from .models.cargo import CargoItem
from .models.estimate import EstimateComparison, EstimateRequest, EstimateResult
from .models.truck import TruckTypeDefinition
from .pricing import calculate_total_points, calculate_total_weight

logger = logging.getLogger(__name__)


class CalculateEstimateResponse(BaseModel):
    result: EstimateResult
    total_points: float
    total_weight: float
    recommended_truck_types: list[str]
    warnings: list[str] = Field(default_factory=list)
    summary: str


class CompareEstimatesRequest(BaseModel):
    estimates: Sequence[EstimateResult] = Field(default_factory=list)


class RecommendTrucksRequest(BaseModel):
    items: Sequence[CargoItem] = Field(default_factory=list)
    total_points: int | float | None = Field(default=None, description="Overrides the points summed from items")
    total_weight: int | float | None = Field(default=None, description="Overrides the weight summed from items")


class RecommendTrucksResponse(BaseModel):
    total_points: float
    total_weight: float
    recommended_truck_types: list[str]
    smallest_truck_type: str


def create_app(calculator: EstimateCalculator | None = None) -> FastAPI:
    calculator = calculator or EstimateCalculator()
    app = FastAPI(title="Moving Estimator API", version="0.1.0")

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        set_request_id(request_id)
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    @app.post("/v1/estimates:calculate", response_model=CalculateEstimateResponse)
    async def calculate(request: EstimateRequest, at: time | None = None) -> CalculateEstimateResponse:
        bundle = calculator.build(request, at=at)
        return CalculateEstimateResponse(
            result=bundle.result,
            total_points=bundle.total_points,
            total_weight=bundle.total_weight,
            recommended_truck_types=bundle.recommended_truck_types,
            warnings=bundle.warnings,
            summary=bundle.summary_markdown,
        )

    @app.post("/v1/estimates:compare", response_model=EstimateComparison)
    async def compare(request: CompareEstimatesRequest) -> EstimateComparison:
        try:
            return calculator.compare(list(request.estimates))
        except ValueError as exc:
            logger.warning("Rejected estimate comparison", extra={"reason": str(exc)})
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/v1/trucks:recommend", response_model=RecommendTrucksResponse)
    async def recommend(request: RecommendTrucksRequest) -> RecommendTrucksResponse:
        total_points = (
            request.total_points
            if request.total_points is not None
            else calculate_total_points(request.items)
        )
        total_weight = (
            request.total_weight
            if request.total_weight is not None
            else calculate_total_weight(request.items)
        )
        return RecommendTrucksResponse(
            total_points=total_points,
            total_weight=total_weight,
            recommended_truck_types=calculator.catalog.recommend(total_points, total_weight),
            smallest_truck_type=calculator.catalog.recommended_type(total_points),
        )

    @app.get("/v1/truck-types", response_model=list[TruckTypeDefinition])
    async def truck_types() -> list[TruckTypeDefinition]:
        return list(calculator.catalog.truck_types)

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app


__all__ = ["create_app", "CalculateEstimateResponse", "CompareEstimatesRequest", "RecommendTrucksRequest"]
